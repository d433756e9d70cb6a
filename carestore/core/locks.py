import asyncio
from contextlib import asynccontextmanager
from weakref import WeakValueDictionary

class RecordLocks:
    """Single-writer discipline: one mutation per record at a time.

    Locks are keyed by (collection, id) and created lazily; entries vanish
    once nobody holds or waits on them.
    """

    def __init__(self):
        self._locks: WeakValueDictionary[tuple[str, str], asyncio.Lock] = WeakValueDictionary()

    def _lock_for(self, collection: str, id: str) -> asyncio.Lock:
        key = (collection, id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, collection: str, id: str):
        lock = self._lock_for(collection, id)
        async with lock:
            yield

record_locks = RecordLocks()
