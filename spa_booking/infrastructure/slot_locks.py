from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Tuple

SlotKey = Tuple[str, str]


class SlotLocks:
    """Per-(date, time) mutexes serializing check-then-insert within one process."""

    def __init__(self) -> None:
        self._locks: Dict[SlotKey, asyncio.Lock] = {}
        self._holders: Dict[SlotKey, int] = {}

    @asynccontextmanager
    async def hold(self, date: str, time: str) -> AsyncIterator[None]:
        key = (date, time)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
