"""Embedding pipeline — extract, batch, encode, reassemble."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from tqdm import tqdm

from compute_embeddings.errors import EmbeddingError
from compute_embeddings.ingestion.batcher import schedule
from compute_embeddings.ingestion.extractor import extract_text
from compute_embeddings.output.models import EmbeddedDocument

if TYPE_CHECKING:
    from compute_embeddings.embeddings.base import EmbeddingBackend

logger = logging.getLogger(__name__)


def embed_documents(
    documents: Sequence[dict[str, Any]],
    field_names: Sequence[str],
    backend: EmbeddingBackend,
    *,
    batch_size: int = 4,
    show_progress: bool = False,
) -> list[EmbeddedDocument]:
    """Embed every document of *documents*, one batch at a time.

    Parameters
    ----------
    documents:
        Parsed input documents, in input order.
    field_names:
        Fields concatenated, in this order, to build each document's text.
    backend:
        Backend turning each batch of texts into vectors.
    batch_size:
        Number of documents sent to the backend per call.
    show_progress:
        Render a progress bar on stderr.

    Returns
    -------
    list[EmbeddedDocument]
        One entry per input document, in input order.

    Raises
    ------
    EmbeddingError
        If the backend fails or returns a wrong number of vectors, or
        vectors of differing dimensionality. The whole run is aborted; no
        partial result is returned.
    """
    embedded: list[EmbeddedDocument] = []
    dimension: int | None = None
    started = time.monotonic()

    logger.info(
        "Embedding %d documents with backend=%s, batch_size=%d, fields=%s",
        len(documents), backend.name, batch_size, list(field_names),
    )

    with tqdm(total=len(documents), disable=not show_progress, unit="doc") as progress:
        for batch in schedule(documents, batch_size):
            texts = [extract_text(document, field_names) for _, document in batch]
            vectors = backend.encode(texts)
            if len(vectors) != len(batch):
                raise EmbeddingError(
                    f"Backend {backend.name} returned {len(vectors)} vectors for {len(batch)} texts"
                )

            for (index, document), vector in zip(batch, vectors):
                if dimension is None:
                    dimension = len(vector)
                elif len(vector) != dimension:
                    raise EmbeddingError(
                        f"Document {index} embedded with dimension {len(vector)}, expected {dimension}"
                    )
                embedded.append(EmbeddedDocument(index=index, document=document, vector=vector))

            progress.update(len(batch))
            logger.debug("  embedded %d / %d", len(embedded), len(documents))

    logger.info(
        "Embedding complete: %d vectors (dim=%s) in %.1fs",
        len(embedded), dimension, time.monotonic() - started,
    )
    return embedded
