from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

R = TypeVar("R")


class AsyncMutex:
    """
    Serializes async work within one process, in arrival order.

    asyncio.Lock wakes waiters first-in first-out and never lets a newcomer
    jump ahead of a queued waiter, which is the ordering run_exclusive relies on.

    No cross-process locking, no timeout: a unit of work that never finishes
    stalls every unit queued behind it.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    def locked(self) -> bool:
        return self._lock.locked()

    async def run_exclusive(self, fn: Callable[[], Awaitable[R]]) -> R:
        async with self._lock:
            return await fn()
