"""Bounded-concurrency capture scheduler.

``run_captures`` keeps at most *concurrency* captures in flight.  URLs are
admitted strictly in input order; completion order is unconstrained, and each
result lands in a pre-sized slot at its WorkItem index so the returned list
always follows the input order.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Iterator, Sequence

from sitepdf.capture.models import CaptureResult, WorkItem
from sitepdf.errors import CaptureError

CaptureFn = Callable[[WorkItem], Awaitable[CaptureResult]]


async def run_captures(
    urls: Sequence[str],
    concurrency: int,
    capture_fn: CaptureFn,
) -> list[Path]:
    """Capture every URL in *urls* and return the artifact paths in input order.

    Fail-fast: after the first failure no further URL is admitted.  Captures
    already in flight are allowed to finish (there is no per-capture
    cancellation) so they can close their pages; then the first error is
    raised and no partial list is returned.

    Args:
        urls: Deduplicated URLs; position ``i`` becomes WorkItem index ``i``.
        concurrency: Maximum number of captures in flight (>= 1).
        capture_fn: Coroutine function capturing one :class:`WorkItem`.

    Returns:
        One path per URL, ordered by WorkItem index.

    Raises:
        ValueError: If *concurrency* is less than 1.
        CaptureError: The first failure reported by any capture.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    items = [WorkItem(url=url, index=i) for i, url in enumerate(urls)]
    if not items:
        return []

    slots: list[Path | None] = [None] * len(items)
    failures: list[CaptureError] = []
    pending: Iterator[WorkItem] = iter(items)

    async def worker() -> None:
        # next() never yields, so two workers can't admit the same item.
        while not failures:
            item = next(pending, None)
            if item is None:
                return
            try:
                result = await capture_fn(item)
                if result.index != item.index:
                    raise CaptureError(
                        item.url, item.index, f"result tagged with index {result.index}"
                    )
            except CaptureError as exc:
                failures.append(exc)
                return
            except Exception as exc:
                error = CaptureError(item.url, item.index, str(exc) or type(exc).__name__)
                error.__cause__ = exc
                failures.append(error)
                return
            slots[item.index] = result.path

    pool_size = min(concurrency, len(items))
    print(f"[CAPTURE] Processing {len(items)} URL(s) with {pool_size} parallel worker(s) …")
    await asyncio.gather(*(worker() for _ in range(pool_size)))

    if failures:
        print(f"[CAPTURE] Aborted after failure: {failures[0]}")
        raise failures[0]

    print(f"[CAPTURE] ✓ Captured {len(slots)} page(s).")
    return [path for path in slots if path is not None]
