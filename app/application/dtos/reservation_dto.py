"""DTOs para reservaciones."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from app.domain.entities.payment import Payment
from app.domain.entities.reservation import Reservation
from app.domain.entities.vehicle import Vehicle
from app.domain.pricing import PriceCalculation


@dataclass
class CreateReservationCommand:
    """
    Datos de entrada para crear una reservación.

    Los campos son opcionales a propósito: la validación de campos requeridos
    es un gate del caso de uso. tariff y payment_method llegan como texto y
    se validan contra sus enumeraciones después del chequeo de disponibilidad.
    """

    vehicle_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    pickup_location: str | None = None
    return_location: str | None = None
    tariff: str | None = None
    payment_method: str | None = None

    # Informativo; el total siempre se calcula en el servidor
    total_price: Decimal | None = None


@dataclass
class EditReservationCommand:
    """Subconjunto mutable de una reservación. None = sin cambio."""

    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    pickup_location: str | None = None
    return_location: str | None = None
    tariff: str | None = None
    payment_method: str | None = None
    status: str | None = None
    total_price: Decimal | None = None


@dataclass
class ReservationResult:
    """Reservación con su pago y, cuando aplica, el cálculo de precio."""

    reservation: Reservation
    payment: Payment | None = None
    price: PriceCalculation | None = None
    vehicle: Vehicle | None = None


@dataclass
class VehicleAvailability:
    """Vehículo de la flota con su estado de reserva en un rango."""

    vehicle: Vehicle
    booked: bool = False


@dataclass
class PriceQuote:
    """Cotización independiente de una reservación."""

    price_per_day: Decimal
    calculation: PriceCalculation
    tariff: str
    vehicle_id: str | None = None
    currency: str = "EUR"
