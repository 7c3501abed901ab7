"""Tests del manejador de transacciones in-memory."""

from decimal import Decimal

import pytest

from app.domain.entities.vehicle import Vehicle
from app.infrastructure.in_memory import InMemoryStore, InMemoryTransactionManager, InMemoryVehicleRepo


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def tx(store):
    return InMemoryTransactionManager(store)


def _vehicle(vehicle_id: str) -> Vehicle:
    return Vehicle(id=vehicle_id, name=vehicle_id, price_per_day=Decimal("10"))


class TestInMemoryTransactionManager:
    @pytest.mark.asyncio
    async def test_commit_keeps_changes(self, store, tx):
        repo = InMemoryVehicleRepo(store)

        async with tx.start():
            repo.add(_vehicle("vehicle-a"))

        assert "vehicle-a" in store.vehicles

    @pytest.mark.asyncio
    async def test_error_restores_snapshot(self, store, tx):
        repo = InMemoryVehicleRepo(store)
        repo.add(_vehicle("vehicle-a"))

        with pytest.raises(RuntimeError):
            async with tx.start():
                repo.add(_vehicle("vehicle-b"))
                store.vehicles["vehicle-a"].available = False
                raise RuntimeError("boom")

        assert set(store.vehicles) == {"vehicle-a"}
        assert store.vehicles["vehicle-a"].available is True

    @pytest.mark.asyncio
    async def test_nested_start_joins_outer_transaction(self, store, tx):
        repo = InMemoryVehicleRepo(store)

        with pytest.raises(RuntimeError):
            async with tx.start():
                async with tx.start():
                    repo.add(_vehicle("vehicle-a"))
                raise RuntimeError("outer failure")

        assert store.vehicles == {}

    @pytest.mark.asyncio
    async def test_clear_resets_store(self, store):
        InMemoryVehicleRepo(store).add(_vehicle("vehicle-a"))

        store.clear()

        assert store.vehicles == {}
        assert store.booked_days == {}
