"""Exception hierarchy shared by the pipeline, the backends and the CLI."""

from __future__ import annotations


class ComputeEmbeddingsError(Exception):
    """Base class for every error this package raises on purpose."""


class InvalidInputError(ComputeEmbeddingsError):
    """Raised when stdin is not a JSON array of objects."""


class MissingCredentialError(ComputeEmbeddingsError):
    """Raised when the remote backend is selected without an API key."""


class EmbeddingError(ComputeEmbeddingsError):
    """Raised when a backend cannot turn texts into vectors."""


class LocalEmbeddingError(EmbeddingError):
    """Raised when the in-process model fails to load or encode."""


class RemoteEmbeddingError(EmbeddingError):
    """Raised when the embeddings API fails in a way retrying cannot fix.

    Attributes
    ----------
    status_code:
        HTTP status of the last response, ``None`` for transport failures.
    body:
        Raw body of the last response, if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TooManyRetriesError(RemoteEmbeddingError):
    """Raised when the retry budget is spent without a successful response."""
