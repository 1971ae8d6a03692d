"""Exclusive-access guard for collaborators shared with background work."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generic, TypeVar

T = TypeVar("T")


class Shared(Generic[T]):
    """Wraps a value so it is only reachable while holding its lock.

    Hold the lock for one logical operation and release it before doing
    anything else; never nest two ``lock()`` calls on the same guard.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def lock(self) -> AsyncIterator[T]:
        async with self._lock:
            yield self._value

    def locked(self) -> bool:
        return self._lock.locked()
