from typing import Sequence

from app.domain.entities.vehicle import Vehicle


class VehicleRepo:
    async def get_by_id(self, vehicle_id: str) -> Vehicle | None:
        raise NotImplementedError

    async def get_for_update(self, vehicle_id: str) -> Vehicle | None:
        """Load the vehicle holding a row lock until the transaction ends."""
        raise NotImplementedError

    async def list_all(self) -> Sequence[Vehicle]:
        raise NotImplementedError
