"""Backend factory so callers never import vendor-specific code directly."""

from __future__ import annotations

from compute_embeddings.config import Settings, get_settings
from compute_embeddings.embeddings.base import EmbeddingBackend, SemanticApi


def build_backend(api: SemanticApi | str, config: Settings | None = None) -> EmbeddingBackend:
    """Instantiate the backend selected by *api*.

    The remote backend validates its credential on construction, so a
    missing ``OPENAI_API_KEY`` surfaces here, before any input is read.
    The local backend defers loading its model until the first ``encode``.
    """
    config = config or get_settings()
    api = api if isinstance(api, SemanticApi) else SemanticApi.parse(api)

    if api is SemanticApi.REMOTE:
        from compute_embeddings.embeddings.remote import RemoteBackend
        from compute_embeddings.embeddings.retry import RetryPolicy

        return RemoteBackend(
            config.openai_api_key,
            model=config.openai_embedding_model,
            url=config.openai_embeddings_url,
            timeout=config.request_timeout,
            policy=RetryPolicy(
                max_attempts=config.retry_max_attempts,
                initial_wait=config.retry_initial_wait,
            ),
        )

    if api is SemanticApi.LOCAL:
        from compute_embeddings.embeddings.local import LocalBackend

        return LocalBackend(model_name=config.local_embedding_model)

    raise ValueError(f"Unknown embeddings backend: {api!r}")
