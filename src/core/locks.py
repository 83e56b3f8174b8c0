"""Per-user mutual exclusion for recommendation writes."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict


class UserLockRegistry:
    """
    Hands out one asyncio.Lock per user id.

    Runs for the same user are serialized; runs for different users never
    contend. A user's lock is dropped once nobody holds or waits for it, so
    the registry does not grow with the number of users ever seen.

    Must be used from a single event loop.
    """

    def __init__(self) -> None:
        self._locks: Dict[int, asyncio.Lock] = {}
        self._users: Dict[int, int] = {}

    @asynccontextmanager
    async def hold(self, user_id: int) -> AsyncGenerator[None, None]:
        """Hold the lock of `user_id` for the duration of the block."""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._users[user_id] = self._users.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[user_id] -= 1
            if self._users[user_id] == 0:
                del self._users[user_id]
                del self._locks[user_id]

    def is_locked(self, user_id: int) -> bool:
        lock = self._locks.get(user_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)


user_locks = UserLockRegistry()
