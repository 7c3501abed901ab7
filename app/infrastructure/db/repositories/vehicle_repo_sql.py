from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.vehicle_repo import VehicleRepo
from app.domain.entities.vehicle import Vehicle
from app.infrastructure.db.tables import vehicles


def _to_vehicle(row) -> Vehicle:
    return Vehicle(
        id=row["id"],
        name=row["name"],
        type=row["type"],
        category=row["category"],
        price_per_day=row["price_per_day"],
        available=bool(row["available"]),
        location=row["location"],
        seats=row["seats"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class VehicleRepoSQL(VehicleRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, vehicle_id: str) -> Vehicle | None:
        stmt = select(vehicles).where(vehicles.c.id == vehicle_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_vehicle(row) if row else None

    async def get_for_update(self, vehicle_id: str) -> Vehicle | None:
        # SELECT ... FOR UPDATE serializes admissions for the same vehicle
        # across workers (dialects without row locks ignore it).
        stmt = select(vehicles).where(vehicles.c.id == vehicle_id).with_for_update()
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_vehicle(row) if row else None

    async def list_all(self) -> Sequence[Vehicle]:
        result = await self._session.execute(select(vehicles).order_by(vehicles.c.name))
        return [_to_vehicle(row) for row in result.mappings().all()]
