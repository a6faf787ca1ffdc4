"""Abstract base class for embedding backends.

The set of backends is closed: :class:`SemanticApi` lists them and
:func:`compute_embeddings.embeddings.registry.build_backend` maps each
member to its implementation. The rest of the pipeline only talks to
:class:`EmbeddingBackend`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum

Vector = list[float]


class SemanticApi(str, Enum):
    """Embedding backends selectable from the command line."""

    REMOTE = "remote"
    LOCAL = "local"

    @classmethod
    def parse(cls, value: str) -> SemanticApi:
        """Accept the canonical names and the provider/model aliases."""
        value = value.strip().lower()
        aliases = {"openai": cls.REMOTE, "all-mini-lm-l6-v2": cls.LOCAL}
        if value in aliases:
            return aliases[value]
        return cls(value)


class EmbeddingBackend(ABC):
    """Turn texts into vectors.

    Implementations must return exactly one vector per input text, in the
    same order, and every vector produced by one instance must share the
    same dimensionality.
    """

    #: Human-readable backend name, used in log lines.
    name: str = "backend"

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def _encode(self, texts: list[str]) -> list[Vector]:
        """Encode a non-empty list of *texts*."""
        ...

    # -- public API -----------------------------------------------------------

    def encode(self, texts: Sequence[str]) -> list[Vector]:
        """Return ``vectors`` such that ``vectors[i]`` embeds ``texts[i]``.

        An empty input short-circuits to an empty output without touching
        the model or the network.
        """
        texts = list(texts)
        if not texts:
            return []
        return self._encode(texts)

    def encode_query(self, query: str) -> Vector:
        """Embed a single query string."""
        return self.encode([query])[0]

    def close(self) -> None:
        """Release resources held by the backend."""

    def __enter__(self) -> EmbeddingBackend:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
