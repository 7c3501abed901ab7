"""
Capa de Aplicación - Sistema de Reservaciones de Vehículos.

Esta capa contiene los casos de uso, DTOs, servicios e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso (crear, editar, cancelar, consultas, cotización)
- services/: Availability Checker
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
"""

from app.application.dtos import (
    CreateReservationCommand,
    EditReservationCommand,
    PriceQuote,
    ReservationResult,
    VehicleAvailability,
)
from app.application.interfaces import (
    Clock,
    FakeClock,
    FakeIdGenerator,
    IdempotencyRecord,
    IdempotencyRepo,
    IdGenerator,
    PaymentRepo,
    RealIdGenerator,
    ReservationRepo,
    SystemClock,
    TransactionManager,
    VehicleLock,
    VehicleRepo,
)

__all__ = [
    # DTOs
    "CreateReservationCommand",
    "EditReservationCommand",
    "ReservationResult",
    "VehicleAvailability",
    "PriceQuote",
    # Interfaces - Repositories
    "VehicleRepo",
    "ReservationRepo",
    "PaymentRepo",
    "IdempotencyRepo",
    "IdempotencyRecord",
    # Interfaces - Infrastructure
    "TransactionManager",
    "VehicleLock",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]
