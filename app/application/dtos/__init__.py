"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from app.application.dtos.reservation_dto import (
    CreateReservationCommand,
    EditReservationCommand,
    PriceQuote,
    ReservationResult,
    VehicleAvailability,
)

__all__ = [
    "CreateReservationCommand",
    "EditReservationCommand",
    "ReservationResult",
    "VehicleAvailability",
    "PriceQuote",
]
