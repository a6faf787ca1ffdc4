"""Text extraction — project a JSON document onto the string that gets embedded."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any


def stringify(value: Any) -> str | None:
    """Turn a JSON *value* into an indexable fragment.

    Strings are returned as is, booleans and numbers in their JSON spelling
    and arrays as the space-joined fragments of their elements. ``None`` is
    returned when the value contributes nothing: ``null``, objects, and
    arrays whose elements all contribute nothing. Objects are not flattened
    so deeply nested metadata cannot blow up the text.
    """
    if value is None or isinstance(value, Mapping):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        fragments = [f for f in (stringify(item) for item in value) if f is not None]
        if not fragments:
            return None
        return " ".join(fragments)
    raise TypeError(f"Cannot stringify value of type {type(value).__name__}")


def extract_text(document: Mapping[str, Any], field_names: Iterable[str]) -> str:
    """Concatenate the requested fields of *document*, in order.

    Parameters
    ----------
    document:
        Arbitrary JSON object.
    field_names:
        Keys to read, in the order they should appear in the text. Missing
        keys are skipped.

    Returns
    -------
    str
        Every contributed fragment followed by a single space. Empty when no
        requested field contributes. No case or punctuation normalisation
        is applied.
    """
    parts: list[str] = []
    for name in field_names:
        if name not in document:
            continue
        fragment = stringify(document[name])
        if fragment is not None:
            parts.append(fragment)
            parts.append(" ")
    return "".join(parts)
