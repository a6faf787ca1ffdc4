"""Records flowing from the pipeline into the output encoders."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

#: Attribute holding the vector in augmented documents.
VECTOR_FIELD = "_vector"


class EmbeddedDocument(BaseModel):
    """A source document together with its position and vector.

    Attributes
    ----------
    index:
        Zero-based position of the document in the input array.
    document:
        The document exactly as it was read.
    vector:
        Embedding of the document's extracted text.
    """

    index: int = Field(ge=0)
    document: dict[str, Any]
    vector: list[float]


class Point(BaseModel):
    """Vector-database ingestion record (Qdrant ``points`` entry)."""

    id: int
    vector: list[float]
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_embedded(cls, embedded: EmbeddedDocument) -> Point:
        payload = {k: v for k, v in embedded.document.items() if k != VECTOR_FIELD}
        return cls(id=embedded.index, vector=embedded.vector, payload=payload)


class PointList(BaseModel):
    """Top-level body of the point-list output style."""

    points: list[Point] = Field(default_factory=list)
