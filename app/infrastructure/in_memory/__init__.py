"""Implementaciones in-memory (modo desarrollo y testing)."""

from app.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from app.infrastructure.in_memory.payment_repo import InMemoryPaymentRepo
from app.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from app.infrastructure.in_memory.store import InMemoryStore
from app.infrastructure.in_memory.transaction_manager import InMemoryTransactionManager
from app.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo

__all__ = [
    "InMemoryStore",
    # Repositories
    "InMemoryVehicleRepo",
    "InMemoryReservationRepo",
    "InMemoryPaymentRepo",
    "InMemoryIdempotencyRepo",
    # Infrastructure
    "InMemoryTransactionManager",
]
