"""Entidades del dominio de reservaciones."""

from app.domain.entities.payment import Payment, PaymentMethod, PaymentStatus
from app.domain.entities.reservation import (
    ACTIVE_STATUSES,
    Reservation,
    ReservationStatus,
    Tariff,
)
from app.domain.entities.vehicle import Vehicle

__all__ = [
    # Reservation
    "Reservation",
    "ReservationStatus",
    "Tariff",
    "ACTIVE_STATUSES",
    # Payment
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    # Vehicle
    "Vehicle",
]
