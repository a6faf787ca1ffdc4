"""Unit tests for the local sentence-transformer backend.

``HuggingFaceEmbeddings`` is patched so no weights are downloaded.
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock, patch

import pytest

from compute_embeddings.embeddings.local import LocalBackend
from compute_embeddings.errors import LocalEmbeddingError


class TestLazyModel:
    def test_model_not_loaded_on_construction(self, fake_hf_embeddings: MagicMock) -> None:
        LocalBackend(model_name="sentence-transformers/all-MiniLM-L6-v2")
        fake_hf_embeddings.assert_not_called()

    def test_model_loaded_once_and_reused(self, fake_hf_embeddings: MagicMock) -> None:
        backend = LocalBackend(model_name="sentence-transformers/all-MiniLM-L6-v2")

        backend.encode(["a"])
        backend.encode(["bb", "ccc"])
        backend.encode_query("dddd")

        fake_hf_embeddings.assert_called_once_with(model_name="sentence-transformers/all-MiniLM-L6-v2")
        assert fake_hf_embeddings.model.embed_documents.call_count == 3

    def test_empty_input_does_not_load_model(self, fake_hf_embeddings: MagicMock) -> None:
        backend = LocalBackend()
        assert backend.encode([]) == []
        fake_hf_embeddings.assert_not_called()

    def test_concurrent_first_calls_load_once(self, fake_hf_embeddings: MagicMock) -> None:
        backend = LocalBackend()
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            backend.encode(["text"])

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        fake_hf_embeddings.assert_called_once()


class TestEncode:
    def test_vectors_align_with_texts(self, fake_hf_embeddings: MagicMock) -> None:
        backend = LocalBackend()
        vectors = backend.encode(["a", "bbb", ""])
        assert vectors == [[1.0, 1.0, 0.0], [3.0, 1.0, 0.0], [0.0, 1.0, 0.0]]
        fake_hf_embeddings.model.embed_documents.assert_called_once_with(["a", "bbb", ""])

    def test_encode_query_returns_single_vector(self, fake_hf_embeddings: MagicMock) -> None:
        assert LocalBackend().encode_query("four") == [4.0, 1.0, 0.0]


class TestFailures:
    def test_load_failure_is_wrapped(self) -> None:
        with patch(
            "compute_embeddings.embeddings.local.HuggingFaceEmbeddings",
            side_effect=OSError("model not found"),
        ):
            backend = LocalBackend(model_name="nope/missing")
            with pytest.raises(LocalEmbeddingError, match="nope/missing"):
                backend.encode(["x"])

    def test_encode_failure_is_not_retried(self, fake_hf_embeddings: MagicMock) -> None:
        fake_hf_embeddings.model.embed_documents.side_effect = RuntimeError("CUDA out of memory")
        backend = LocalBackend()

        with pytest.raises(LocalEmbeddingError, match="CUDA out of memory"):
            backend.encode(["x"])
        assert fake_hf_embeddings.model.embed_documents.call_count == 1
