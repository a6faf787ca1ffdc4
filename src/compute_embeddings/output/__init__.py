"""
Output — render embedded documents for Meilisearch- or Qdrant-style ingestion.

Public surface
--------------
- :class:`DocumentStyle` — the closed set of output shapes.
- :class:`OutputEncoder` — abstract encoder.
- :class:`AugmentedDocumentEncoder`, :class:`PointListEncoder` — the two shapes.
- :class:`EmbeddedDocument`, :class:`Point` — data models.
- :func:`get_encoder` — factory keyed by :class:`DocumentStyle`.
"""

from compute_embeddings.output.encoders import (
    AugmentedDocumentEncoder,
    DocumentStyle,
    OutputEncoder,
    PointListEncoder,
    get_encoder,
)
from compute_embeddings.output.models import VECTOR_FIELD, EmbeddedDocument, Point, PointList

__all__ = [
    "AugmentedDocumentEncoder",
    "DocumentStyle",
    "EmbeddedDocument",
    "OutputEncoder",
    "Point",
    "PointList",
    "PointListEncoder",
    "VECTOR_FIELD",
    "get_encoder",
]
