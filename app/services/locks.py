"""Per-key async locks serializing check-then-write sequences"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID


class KeyedLocks:
    """One asyncio.Lock per key; entries vanish once nobody holds or awaits them."""

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    @asynccontextmanager
    async def hold(self, key: str):
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


def table_key(table_id: UUID) -> str:
    return f"table:{table_id}"


def slot_key(location: str, on_date: date) -> str:
    return f"slots:{location}:{on_date.isoformat()}"
