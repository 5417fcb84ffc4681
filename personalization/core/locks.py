"""Per-key asyncio locks used to serialise mutations of shared state."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class KeyedLock:
    """
    One asyncio.Lock per key (content id, user id).

    Operations on different keys run concurrently; operations on the same
    key are serialised so that a read-modify-persist sequence is observed
    as one unit. A key's lock is dropped once its holder and every waiter
    are gone, so the map only holds keys that are in use.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        # Holder plus waiters per key
        self._users: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return bool(lock and lock.locked())

    def __len__(self) -> int:
        return len(self._locks)
