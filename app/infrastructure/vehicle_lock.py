"""In-process per-vehicle locks for the admission critical section."""

import asyncio
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.application.interfaces.vehicle_lock import VehicleLock


class InProcessVehicleLock(VehicleLock):
    """
    One asyncio.Lock per vehicle id.

    Locks are dropped once nobody holds or waits on them. Only serializes
    callers inside this process; the storage constraint on reservation_days
    covers multiple workers.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, vehicle_id: str) -> asyncio.Lock:
        lock = self._locks.get(vehicle_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[vehicle_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, vehicle_id: str) -> AsyncIterator[None]:
        lock = self._lock_for(vehicle_id)
        async with lock:
            yield
