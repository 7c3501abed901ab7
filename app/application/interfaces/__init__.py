"""
Interfaces (Puertos) de la capa de aplicación.

Definen los contratos que la infraestructura debe implementar.
"""

from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.id_generator import FakeIdGenerator, IdGenerator, RealIdGenerator
from app.application.interfaces.idempotency_repo import IdempotencyRecord, IdempotencyRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_lock import VehicleLock
from app.application.interfaces.vehicle_repo import VehicleRepo

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "FakeClock",
    # Identificadores
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
    # Repositories
    "ReservationRepo",
    "PaymentRepo",
    "VehicleRepo",
    "IdempotencyRepo",
    "IdempotencyRecord",
    # Infrastructure
    "TransactionManager",
    "VehicleLock",
]
