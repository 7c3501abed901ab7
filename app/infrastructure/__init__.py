"""
Capa de Infraestructura - Sistema de Reservaciones.

Implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: tablas SQLAlchemy Core, repositorios SQL, transacciones y reintentos
- in_memory/: implementaciones in-memory para desarrollo y testing
- vehicle_lock.py: locks por vehículo dentro del proceso
- seed.py: flota de demostración
"""

# Database
from app.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from app.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from app.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from app.infrastructure.db.repositories.vehicle_repo_sql import VehicleRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

# In-Memory (for testing)
from app.infrastructure.in_memory import (
    InMemoryIdempotencyRepo,
    InMemoryPaymentRepo,
    InMemoryReservationRepo,
    InMemoryStore,
    InMemoryTransactionManager,
    InMemoryVehicleRepo,
)
from app.infrastructure.vehicle_lock import InProcessVehicleLock

__all__ = [
    # Database - Repositories SQL
    "VehicleRepoSQL",
    "ReservationRepoSQL",
    "PaymentRepoSQL",
    "IdempotencyRepoSQL",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryStore",
    "InMemoryVehicleRepo",
    "InMemoryReservationRepo",
    "InMemoryPaymentRepo",
    "InMemoryIdempotencyRepo",
    "InMemoryTransactionManager",
    # Locks
    "InProcessVehicleLock",
]
