"""Flota de demostración para el modo en memoria y scripts/seed_db.py."""

from decimal import Decimal

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from app.domain.entities.vehicle import Vehicle
from app.infrastructure.db.tables import vehicles
from app.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo

DEMO_VEHICLES: tuple[Vehicle, ...] = (
    Vehicle(id="vehicle-1", name="VW Golf", type="Compact", category="COMPACT",
            price_per_day=Decimal("35.00"), location="Berlin Central", seats=5),
    Vehicle(id="vehicle-2", name="BMW X7", type="SUV", category="SUV",
            price_per_day=Decimal("75.00"), location="Munich Airport", seats=5),
    Vehicle(id="vehicle-3", name="Mercedes S-Class", type="Sedan", category="PREMIUM",
            price_per_day=Decimal("95.00"), location="Hamburg Central", seats=5),
    Vehicle(id="vehicle-4", name="BMW-M4", type="Sports Car", category="SPORTS",
            price_per_day=Decimal("150.00"), location="Berlin Central", seats=5),
    Vehicle(id="vehicle-5", name="Mercedes Sprinter", type="Van", category="VAN",
            price_per_day=Decimal("65.00"), location="Bremen Central Station", seats=3),
    Vehicle(id="vehicle-6", name="Audi A4", type="Sedan", category="STANDARD",
            price_per_day=Decimal("55.00"), location="Berlin Central", seats=5),
    Vehicle(id="vehicle-7", name="Porsche 911", type="Sports Car", category="SPORTS",
            price_per_day=Decimal("250.00"), location="Munich Airport", seats=2),
)


def seed_in_memory(vehicle_repo: InMemoryVehicleRepo) -> None:
    for vehicle in DEMO_VEHICLES:
        vehicle_repo.add(vehicle)


async def seed_sql(conn: AsyncConnection) -> int:
    """Inserta los vehículos de demo que falten. Retorna cuántos insertó."""
    existing = set((await conn.execute(select(vehicles.c.id))).scalars().all())
    rows = [
        {
            "id": vehicle.id,
            "name": vehicle.name,
            "type": vehicle.type,
            "category": vehicle.category,
            "price_per_day": vehicle.price_per_day,
            "available": vehicle.available,
            "location": vehicle.location,
            "seats": vehicle.seats,
        }
        for vehicle in DEMO_VEHICLES
        if vehicle.id not in existing
    ]
    if rows:
        await conn.execute(insert(vehicles), rows)
    return len(rows)
