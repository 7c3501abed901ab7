from dataclasses import replace
from typing import Sequence

from app.application.interfaces.vehicle_repo import VehicleRepo
from app.domain.entities.vehicle import Vehicle
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryVehicleRepo(VehicleRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def add(self, vehicle: Vehicle) -> None:
        """Registra un vehículo (la gestión de flota vive fuera del core)."""
        self._store.vehicles[vehicle.id] = replace(vehicle)

    async def get_by_id(self, vehicle_id: str) -> Vehicle | None:
        vehicle = self._store.vehicles.get(vehicle_id)
        return replace(vehicle) if vehicle else None

    async def get_for_update(self, vehicle_id: str) -> Vehicle | None:
        # Las transacciones in-memory ya son serializables
        return await self.get_by_id(vehicle_id)

    async def list_all(self) -> Sequence[Vehicle]:
        return [
            replace(v)
            for v in sorted(self._store.vehicles.values(), key=lambda v: v.name)
        ]
