"""Concurrency primitive for the per-title fan-out in species search.

**throttled_gather** is a drop-in replacement for ``asyncio.gather`` that
wraps each awaitable in a semaphore acquire/release.  The resolution
pipeline uses it so a broad search never opens more simultaneous Wikimedia
lookups than the configured limit, while still joining on every member.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Sequence
from typing import TypeVar

_T = TypeVar("_T")


async def throttled_gather(
    coros: Sequence[Awaitable[_T]],
    semaphore: asyncio.Semaphore | None = None,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Await every item of *coros*, at most ``semaphore`` of them at a time.

    Results come back in input order.  With ``return_exceptions=True`` (the
    default) a failing member's exception takes its slot in the list and
    its siblings still complete.  ``semaphore=None`` means no limit.
    """
    if semaphore is None:
        return list(await asyncio.gather(*coros, return_exceptions=return_exceptions))

    async def _bounded(aw: Awaitable[_T]) -> _T:
        async with semaphore:
            return await aw

    return list(
        await asyncio.gather(
            *(_bounded(aw) for aw in coros), return_exceptions=return_exceptions
        )
    )
