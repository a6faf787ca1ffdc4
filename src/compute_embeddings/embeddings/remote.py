"""OpenAI embeddings API backend with backoff and truncation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests
from pydantic import BaseModel, ValidationError

from compute_embeddings.config import get_settings
from compute_embeddings.embeddings.base import EmbeddingBackend, Vector
from compute_embeddings.embeddings.retry import (
    BACKOFF_STATUSES,
    TRUNCATE_STATUS,
    RetryPolicy,
    RetryState,
)
from compute_embeddings.errors import (
    MissingCredentialError,
    RemoteEmbeddingError,
    TooManyRetriesError,
)

logger = logging.getLogger(__name__)


# ── Wire schemas ──────────────────────────────────────────────────────
class EmbeddingItem(BaseModel):
    """One entry of the ``data`` list returned by the API."""

    embedding: list[float]
    index: int | None = None


class EmbeddingResponse(BaseModel):
    """Successful response body of the embeddings endpoint."""

    data: list[EmbeddingItem]

    def vectors(self) -> list[Vector]:
        """Return the embeddings in request order.

        Entries are re-sorted by ``index`` when the provider sends one;
        otherwise their position is trusted.
        """
        items = self.data
        if items and all(item.index is not None for item in items):
            items = sorted(items, key=lambda item: item.index)
        return [item.embedding for item in items]


# ── Backend ───────────────────────────────────────────────────────────
class RemoteBackend(EmbeddingBackend):
    """Embed texts through the hosted OpenAI embeddings endpoint.

    All texts of one :meth:`encode` call travel in a single request. The
    call resends on 429/503 after a growing wait, shrinks every text on 400
    and gives up on anything else.

    Parameters
    ----------
    api_key:
        Bearer credential. Checked here, before any network activity.
    model:
        Model identifier sent in every request body.
    url:
        Embeddings endpoint.
    timeout:
        Per-request timeout in seconds.
    policy:
        Backoff and truncation parameters.
    session:
        ``requests`` session to send through; a new one by default.
    sleep:
        Called with the wait duration in seconds before each resend.
    """

    name = "remote"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
        policy: RetryPolicy | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        settings = get_settings()
        api_key = settings.openai_api_key if api_key is None else api_key
        if not api_key:
            raise MissingCredentialError("missing OPENAI_API_KEY env variable")
        self.model = model or settings.openai_embedding_model
        self.url = url or settings.openai_embeddings_url
        self.timeout = timeout or settings.request_timeout
        self.policy = policy or RetryPolicy(
            max_attempts=settings.retry_max_attempts,
            initial_wait=settings.retry_initial_wait,
        )
        self._api_key = api_key
        # Only a session created here is closed by close().
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._sleep = sleep

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def _post(self, texts: list[str]) -> requests.Response:
        try:
            return self._session.post(
                self.url,
                json={"model": self.model, "input": texts},
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteEmbeddingError(f"Cannot query OpenAI due to {exc}") from exc

    def _encode(self, texts: list[str]) -> list[Vector]:
        state: RetryState = self.policy.new_state(texts)

        for attempt in state.attempts():
            response = self._post(state.texts)
            status = response.status_code

            if 200 <= status < 300:
                return self._parse(response, expected=len(state.texts))

            if status in BACKOFF_STATUSES:
                wait = state.next_wait()
                logger.warning(
                    "Retrying after %.2fs (attempt %d/%d, status %d): %s",
                    wait, attempt, self.policy.max_attempts, status, response.text,
                )
                self._sleep(wait)
            elif status == TRUNCATE_STATUS:
                max_length, cut_at = state.truncate()
                logger.warning(
                    "Seeing error, cutting texts from max %d to %d chars (attempt %d/%d): %s",
                    max_length, cut_at, attempt, self.policy.max_attempts, response.text,
                )
            else:
                raise RemoteEmbeddingError(
                    f"Cannot query OpenAI due to a {status} status code. {response.text}",
                    status_code=status,
                    body=response.text,
                )

        raise TooManyRetriesError(
            f"Cannot query OpenAI, too many retries ({self.policy.max_attempts} attempts)",
            status_code=status,
            body=response.text,
        )

    @staticmethod
    def _parse(response: requests.Response, *, expected: int) -> list[Vector]:
        try:
            vectors = EmbeddingResponse.model_validate(response.json()).vectors()
        except (ValueError, ValidationError) as exc:
            raise RemoteEmbeddingError(
                f"Cannot decode OpenAI response: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if len(vectors) != expected:
            raise RemoteEmbeddingError(
                f"OpenAI returned {len(vectors)} embeddings for {expected} inputs",
                status_code=response.status_code,
                body=response.text,
            )
        return vectors
