"""
Embeddings — the backends that turn texts into vectors.

Public surface
--------------
- :class:`EmbeddingBackend` — abstract backend.
- :class:`SemanticApi` — the closed set of selectable backends.
- :class:`RemoteBackend` — OpenAI embeddings API with backoff/truncation.
- :class:`LocalBackend` — in-process sentence-transformer.
- :class:`RetryPolicy` — backoff and truncation parameters.
- :func:`build_backend` — factory keyed by :class:`SemanticApi`.
"""

from compute_embeddings.embeddings.base import EmbeddingBackend, SemanticApi, Vector
from compute_embeddings.embeddings.registry import build_backend
from compute_embeddings.embeddings.retry import RetryPolicy

__all__ = [
    "EmbeddingBackend",
    "LocalBackend",
    "RemoteBackend",
    "RetryPolicy",
    "SemanticApi",
    "Vector",
    "build_backend",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import the concrete backends so heavy dependencies load on demand."""
    if name == "LocalBackend":
        from compute_embeddings.embeddings.local import LocalBackend

        return LocalBackend
    if name == "RemoteBackend":
        from compute_embeddings.embeddings.remote import RemoteBackend

        return RemoteBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
