from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class VehicleLock(Protocol):
    """Serializes admission critical sections per vehicle."""

    @asynccontextmanager
    async def hold(self, vehicle_id: str) -> AsyncIterator[None]:
        yield
