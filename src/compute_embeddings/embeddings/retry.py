"""Retry contract of the remote backend.

:class:`RetryPolicy` describes *what* the backend does on a retryable
response (how long to wait, how the wait grows, how many attempts are
allowed, how much to cut on an oversized payload). :class:`RetryState`
carries the mutable part of a single ``encode`` call. Neither sleeps: the
backend owns the sleep function so tests can replace it.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

#: Statuses answered by waiting and resending the same texts.
BACKOFF_STATUSES = frozenset({429, 503})

#: Status answered by shrinking every text. Most of the time the provider
#: rejects the batch because one text exceeds the model's token limit, but a
#: 400 can have other causes truncation will not fix; those only stop at the
#: attempt cap.
TRUNCATE_STATUS = 400


class RetryPolicy(BaseModel):
    """Backoff and truncation parameters for one remote ``encode`` call."""

    max_attempts: int = Field(default=100, gt=0)
    initial_wait: float = Field(default=2.0, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1)
    truncate_percent: int = Field(default=80, gt=0, lt=100)

    def new_state(self, texts: list[str]) -> RetryState:
        return RetryState(policy=self, texts=list(texts), wait_for=self.initial_wait)


class RetryState(BaseModel):
    """Transient state of one ``encode`` call, discarded when it returns."""

    policy: RetryPolicy
    texts: list[str]
    wait_for: float
    attempt: int = 0

    def attempts(self) -> Iterator[int]:
        """Yield the 1-based attempt numbers allowed by the policy."""
        while self.attempt < self.policy.max_attempts:
            self.attempt += 1
            yield self.attempt

    def next_wait(self) -> float:
        """Return the wait before the next resend and grow it for the one after."""
        wait = self.wait_for
        self.wait_for = wait * self.policy.backoff_factor
        return wait

    def truncate(self) -> tuple[int, int]:
        """Cut every text to ``truncate_percent`` of the current longest one.

        The shrink is permanent for the rest of the call. Returns
        ``(max_length, cut_at)`` for logging.
        """
        max_length = max(len(text) for text in self.texts)
        cut_at = max_length * self.policy.truncate_percent // 100
        self.texts = [text[:cut_at] for text in self.texts]
        return max_length, cut_at
