# src/igor/engine/rescale.py
"""Parallel bulk rescale over flat numeric arrays.

The one migration step allowed to fan out: every element is read and
written independently, so disjoint index chunks can be processed by worker
threads without locking. Graph rewrites never go through here.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from concurrent.futures import Future, ThreadPoolExecutor

from igor.core.config import ConcurrencySettings


def _apply_chunk(values: MutableSequence[float], fn: Callable[[float], float], start: int, stop: int) -> None:
    for index in range(start, stop):
        values[index] = fn(values[index])


def parallel_apply(
    values: MutableSequence[float],
    fn: Callable[[float], float],
    *,
    max_workers: int = 4,
    chunk_size: int = 8192,
) -> None:
    """Replace every element ``v`` of ``values`` with ``fn(v)`` in place.

    Arrays no larger than one chunk are processed on the calling thread.
    Worker exceptions propagate once all chunks finished.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    total = len(values)
    if total <= chunk_size or max_workers <= 1:
        _apply_chunk(values, fn, 0, total)
        return

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures: list[Future[None]] = [
            pool.submit(_apply_chunk, values, fn, start, min(start + chunk_size, total)) for start in range(0, total, chunk_size)
        ]
    for future in futures:
        future.result()


def scale_values(values: MutableSequence[float], factor: float, concurrency: ConcurrencySettings | None = None) -> None:
    """Multiply every element by ``factor`` in place."""
    concurrency = concurrency if concurrency is not None else ConcurrencySettings()
    parallel_apply(values, lambda v: v * factor, max_workers=concurrency.max_workers, chunk_size=concurrency.chunk_size)


def invert_values(values: MutableSequence[float], concurrency: ConcurrencySettings | None = None) -> None:
    """Replace every element ``v`` with ``1 - v`` in place."""
    concurrency = concurrency if concurrency is not None else ConcurrencySettings()
    parallel_apply(values, lambda v: 1.0 - v, max_workers=concurrency.max_workers, chunk_size=concurrency.chunk_size)
