"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from compute_embeddings.config import get_settings


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class RecordingSleep:
    """Sleep replacement that records the requested durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def fake_session() -> MagicMock:
    """A ``requests.Session`` whose ``post`` answers are set per test."""
    return MagicMock()


@pytest.fixture()
def fake_hf_embeddings():
    """Patch ``HuggingFaceEmbeddings`` with a model returning ``[len(text), 1.0, 0.0]``."""
    model = MagicMock()
    model.embed_documents.side_effect = lambda texts: [[float(len(t)), 1.0, 0.0] for t in texts]
    with patch(
        "compute_embeddings.embeddings.local.HuggingFaceEmbeddings", return_value=model
    ) as factory:
        factory.model = model
        yield factory


@pytest.fixture(autouse=True)
def fresh_settings():
    """Rebuild the settings from the environment in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
