"""Output encoders — shape embedded documents for a target index."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum
from typing import Any

from compute_embeddings.output.models import VECTOR_FIELD, EmbeddedDocument, Point, PointList


class DocumentStyle(str, Enum):
    """Output shapes selectable from the command line."""

    AUGMENTED_DOCUMENT = "augmented-document"
    POINT_LIST = "point-list"

    @classmethod
    def parse(cls, value: str) -> DocumentStyle:
        """Accept the canonical names and the target-engine aliases."""
        value = value.strip().lower()
        aliases = {"meilisearch": cls.AUGMENTED_DOCUMENT, "qdrant": cls.POINT_LIST}
        if value in aliases:
            return aliases[value]
        return cls(value)


class OutputEncoder(ABC):
    """Render embedded documents into a JSON-serialisable value.

    Records are always emitted in input order, whatever order they are
    handed over in. Source documents are never mutated.
    """

    def render(self, embedded: Iterable[EmbeddedDocument]) -> Any:
        ordered = sorted(embedded, key=lambda item: item.index)
        return self._render(ordered)

    @abstractmethod
    def _render(self, ordered: list[EmbeddedDocument]) -> Any:
        ...


class AugmentedDocumentEncoder(OutputEncoder):
    """Every original field plus the vector under ``_vector`` (Meilisearch)."""

    def _render(self, ordered: list[EmbeddedDocument]) -> list[dict[str, Any]]:
        return [{**item.document, VECTOR_FIELD: item.vector} for item in ordered]


class PointListEncoder(OutputEncoder):
    """``{"points": [{"id", "vector", "payload"}, ...]}`` (Qdrant)."""

    def _render(self, ordered: list[EmbeddedDocument]) -> dict[str, Any]:
        points = PointList(points=[Point.from_embedded(item) for item in ordered])
        return points.model_dump()


def get_encoder(style: DocumentStyle | str) -> OutputEncoder:
    """Return the encoder for *style*."""
    style = style if isinstance(style, DocumentStyle) else DocumentStyle.parse(style)
    if style is DocumentStyle.AUGMENTED_DOCUMENT:
        return AugmentedDocumentEncoder()
    if style is DocumentStyle.POINT_LIST:
        return PointListEncoder()
    raise ValueError(f"Unsupported document style: {style!r}")
