"""
Bounded-concurrency fan-out/fan-in over fixed-size batches.

At most ``batch_size`` calls are in flight at once: each batch is
submitted to a thread pool and fully settled before the next starts.
"""

from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of one call made by run_in_batches."""

    item: T
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of ``size`` items; the last may be shorter."""
    for start in range(0, len(items), size):
        yield items[start:start + size]


def _call(func: Callable[[T], Any], item: T) -> OperationResult[T]:
    try:
        return OperationResult(item=item, value=func(item))
    except Exception as e:
        return OperationResult(item=item, error=e)


def run_in_batches(
    items: Sequence[T],
    func: Callable[[T], Any],
    batch_size: int,
    on_batch_done: Optional[Callable[[int, list[OperationResult[T]]], None]] = None,
) -> list[OperationResult[T]]:
    """
    Call ``func`` on every item, ``batch_size`` items at a time.

    A failing call is recorded on its result and does not stop the
    other calls of its batch or any later batch.

    Args:
        items: Items to process, in order.
        func: Called once per item from a worker thread.
        batch_size: Maximum number of concurrent calls.
        on_batch_done: Optional callback receiving the 1-based batch
                       number and that batch's results.

    Returns:
        One OperationResult per item, in input order.
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be at least 1, got {batch_size}.")

    results: list[OperationResult[T]] = []
    if not items:
        return results

    with ThreadPoolExecutor(max_workers=batch_size) as executor:
        for number, batch in enumerate(chunked(items, batch_size), start=1):
            futures = [executor.submit(_call, func, item) for item in batch]
            batch_results = [future.result() for future in futures]
            results.extend(batch_results)

            if on_batch_done:
                on_batch_done(number, batch_results)

    return results
