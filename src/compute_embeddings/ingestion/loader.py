"""Document loaders — parse the JSON array read from stdin."""

from __future__ import annotations

import json
from typing import IO, Any

from compute_embeddings.errors import InvalidInputError


def load_documents(stream: IO[str]) -> list[dict[str, Any]]:
    """Parse *stream* as a JSON array of objects.

    Parameters
    ----------
    stream:
        Text stream positioned at the start of the JSON payload (usually
        ``sys.stdin``).

    Returns
    -------
    list[dict[str, Any]]
        The documents, in input order. Their shape is not inspected beyond
        being JSON objects.

    Raises
    ------
    InvalidInputError
        If the payload is not valid JSON, not an array, or holds a
        non-object element.
    """
    try:
        payload = json.load(stream, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Input is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise InvalidInputError("Input is not valid JSON: nesting is too deep") from exc
    return validate_documents(payload)


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are accepted by the json module but are not JSON.
    raise InvalidInputError(f"Input is not valid JSON: {name} is not a JSON value")


def validate_documents(payload: Any) -> list[dict[str, Any]]:
    """Check that an already-decoded *payload* is a list of JSON objects."""
    if not isinstance(payload, list):
        raise InvalidInputError(
            f"Input must be a JSON array of objects, got {type(payload).__name__}"
        )
    for position, document in enumerate(payload):
        if not isinstance(document, dict):
            raise InvalidInputError(
                f"Document at position {position} is a {type(document).__name__}, expected an object"
            )
    return payload
