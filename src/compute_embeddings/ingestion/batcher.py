"""Batch scheduling — group indexed documents for embedding calls."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import islice
from typing import Any

Batch = list[tuple[int, dict[str, Any]]]


def schedule(documents: Iterable[dict[str, Any]], size: int) -> Iterator[Batch]:
    """Yield ``(index, document)`` groups of *size* items, in input order.

    The iterator is lazy and single-pass: it pulls from *documents* only as
    batches are requested. Every batch holds exactly *size* pairs except
    possibly the last one.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"Batch size must be a positive integer, got {size!r}")

    indexed = enumerate(documents)
    while True:
        batch = list(islice(indexed, size))
        if not batch:
            return
        yield batch
