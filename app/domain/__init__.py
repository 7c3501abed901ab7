"""
Capa de Dominio - Sistema de Reservaciones de Vehículos.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, el motor de precios, la política de roles y
excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Vehicle, Reservation, Payment)
- value_objects/: Objetos de valor inmutables (DateRange)
- pricing.py: Tabla de tarifas y cálculo de precios
- policies.py: Roles y capacidades
- errors.py: Excepciones específicas del dominio
"""

from app.domain.entities import (
    ACTIVE_STATUSES,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Reservation,
    ReservationStatus,
    Tariff,
    Vehicle,
)
from app.domain.errors import (
    AccessDeniedError,
    DomainError,
    IdempotencyConflictError,
    InvalidDateRangeError,
    InvalidReservationStatusError,
    NotFoundError,
    ReservationConflictError,
    ReservationNotFoundError,
    UnauthorizedError,
    ValidationError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from app.domain.policies import CallerIdentity, Capability, Role, has_capability
from app.domain.pricing import PriceCalculation, PriceLine, TariffConfig, calculate_price
from app.domain.value_objects import DateRange

__all__ = [
    # Entities
    "Reservation",
    "ReservationStatus",
    "Tariff",
    "ACTIVE_STATUSES",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "Vehicle",
    # Value Objects
    "DateRange",
    # Pricing
    "PriceCalculation",
    "PriceLine",
    "TariffConfig",
    "calculate_price",
    # Policies
    "CallerIdentity",
    "Capability",
    "Role",
    "has_capability",
    # Errors
    "DomainError",
    "UnauthorizedError",
    "AccessDeniedError",
    "ValidationError",
    "InvalidDateRangeError",
    "NotFoundError",
    "VehicleNotFoundError",
    "ReservationNotFoundError",
    "VehicleUnavailableError",
    "ReservationConflictError",
    "InvalidReservationStatusError",
    "IdempotencyConflictError",
]
