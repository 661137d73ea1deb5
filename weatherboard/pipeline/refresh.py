"""Bulk refresh: re-fetch every tracked location concurrently."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from weatherboard.models.reporting import RefreshSummary
from weatherboard.models.weather import LocationRecord
from weatherboard.registry.location_registry import LocationRegistry

logger = logging.getLogger(__name__)

FetchOne = Callable[[str], Awaitable[LocationRecord]]

DEFAULT_FETCH_TIMEOUT = 10.0


async def refresh_all(
    registry: LocationRegistry,
    fetch_one: FetchOne,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    drop_failed: bool = True,
) -> RefreshSummary:
    """Re-fetch every registered location by name and commit once.

    All fetches run concurrently and are awaited before anything is
    committed. Results keep the registry's order regardless of completion
    order. A failed or timed-out fetch drops that location unless
    ``drop_failed`` is False, in which case its last-known record is kept.
    Individual failures are logged, never raised.
    """
    start = time.monotonic()
    current = registry.records
    summary = RefreshSummary(requested=len(current))

    results = await asyncio.gather(
        *(asyncio.wait_for(fetch_one(r.name), timeout) for r in current),
        return_exceptions=True,
    )

    refreshed: list[LocationRecord] = []
    for previous, result in zip(current, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                # CancelledError, KeyboardInterrupt
                raise result
            summary.failed.append(previous.name)
            if isinstance(result, TimeoutError):
                logger.warning("Refresh of %s timed out after %.1fs", previous.name, timeout)
            else:
                logger.warning("Refresh of %s failed: %s", previous.name, result)
            if not drop_failed:
                refreshed.append(previous)
            continue
        summary.refreshed += 1
        refreshed.append(result)

    registry.replace_all(refreshed)

    summary.duration_seconds = time.monotonic() - start
    logger.info(
        "Refreshed %d/%d location(s) in %.1fs",
        summary.refreshed, summary.requested, summary.duration_seconds,
    )
    return summary
