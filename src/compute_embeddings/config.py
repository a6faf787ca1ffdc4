"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Remote (OpenAI) backend
    openai_api_key: str = Field(default="", description="OpenAI API key, required by the remote backend")
    openai_embeddings_url: str = "https://api.openai.com/v1/embeddings"
    openai_embedding_model: str = "text-embedding-ada-002"
    request_timeout: float = Field(default=60.0, gt=0, description="Per-request timeout in seconds")

    # Retry policy of the remote backend
    retry_max_attempts: int = Field(default=100, gt=0)
    retry_initial_wait: float = Field(default=2.0, ge=0)

    # Local backend
    local_embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Pipeline
    batch_size: int = Field(default=4, gt=0, description="Number of documents embedded per call")
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build the settings once, on first use.

    Raises ``pydantic.ValidationError`` when an environment value is invalid,
    so callers can report it instead of failing at import time.
    """
    return Settings()
