"""In-process sentence-transformer backend."""

from __future__ import annotations

import logging
import threading
import time

from langchain_huggingface import HuggingFaceEmbeddings

from compute_embeddings.config import get_settings
from compute_embeddings.embeddings.base import EmbeddingBackend, Vector
from compute_embeddings.errors import LocalEmbeddingError

logger = logging.getLogger(__name__)


class LocalBackend(EmbeddingBackend):
    """Embed texts with a HuggingFace sentence-transformer running locally.

    The model is loaded on the first :meth:`encode` call and reused for the
    lifetime of the backend. Loading may download weights, so it is deferred
    until there is actually something to embed.

    Parameters
    ----------
    model_name:
        HuggingFace model id.
    """

    name = "local"

    def __init__(self, model_name: str | None = None) -> None:
        self.model_name = model_name or get_settings().local_embedding_model
        self._model: HuggingFaceEmbeddings | None = None
        self._lock = threading.Lock()

    @property
    def model(self) -> HuggingFaceEmbeddings:
        """Return the model, loading it exactly once."""
        if self._model is None:
            with self._lock:
                if self._model is None:
                    self._model = self._load_model()
        return self._model

    def _load_model(self) -> HuggingFaceEmbeddings:
        started = time.monotonic()
        try:
            model = HuggingFaceEmbeddings(model_name=self.model_name)
        except Exception as exc:
            raise LocalEmbeddingError(f"Cannot load model {self.model_name!r}: {exc}") from exc
        logger.info("It took %.2fs to initialize the model %s", time.monotonic() - started, self.model_name)
        return model

    def _encode(self, texts: list[str]) -> list[Vector]:
        model = self.model
        try:
            vectors = model.embed_documents(texts)
        except Exception as exc:
            raise LocalEmbeddingError(f"Model {self.model_name!r} failed to encode: {exc}") from exc
        return [list(vector) for vector in vectors]
