from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.reservation_dto import (
    PriceQuote,
    ReservationResult,
    VehicleAvailability,
)
from app.domain.entities.payment import Payment
from app.domain.entities.reservation import Reservation
from app.domain.pricing import PriceCalculation, TariffConfig

CENT = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class ApiModel(BaseModel):
    model_config = ConfigDict(json_encoders={Decimal: lambda v: format(v, ".2f")})


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vehicle_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = Field(default=None, examples=["10:00"])
    end_time: str | None = Field(default=None, examples=["18:00"])
    pickup_location: str | None = None
    return_location: str | None = None
    tariff: str | None = Field(default=None, examples=["BASIC"])
    payment_method: str | None = Field(default=None, examples=["CREDIT_CARD"])
    total_price: Decimal | None = Field(default=None, ge=0)


class EditReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    pickup_location: str | None = None
    return_location: str | None = None
    tariff: str | None = None
    payment_method: str | None = None
    status: str | None = None
    total_price: Decimal | None = Field(default=None, ge=0)


class PaymentSummary(ApiModel):
    id: str
    amount: Decimal
    currency: str
    payment_method: str
    status: str

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentSummary":
        return cls(
            id=payment.id,
            amount=to_money(payment.amount),
            currency=payment.currency,
            payment_method=payment.payment_method.value,
            status=payment.status.value,
        )


class PriceLineResponse(ApiModel):
    description: str
    amount: Decimal


class PriceBreakdownResponse(ApiModel):
    days: int
    base_price: Decimal
    tariff_adjustment: Decimal
    total_price: Decimal
    breakdown: list[PriceLineResponse]

    @classmethod
    def from_calculation(cls, calculation: PriceCalculation) -> "PriceBreakdownResponse":
        return cls(
            days=calculation.days,
            base_price=to_money(calculation.base_price),
            tariff_adjustment=to_money(calculation.tariff_adjustment),
            total_price=to_money(calculation.total_price),
            breakdown=[
                PriceLineResponse(description=line.description, amount=to_money(line.amount))
                for line in calculation.breakdown
            ],
        )


class ReservationResponse(ApiModel):
    id: str
    user_id: str
    vehicle_id: str
    start_date: date
    end_date: date
    start_time: str
    end_time: str
    pickup_location: str
    return_location: str
    status: str
    tariff: str
    total_price: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None
    payment: PaymentSummary | None = None
    price: PriceBreakdownResponse | None = None

    @classmethod
    def from_result(cls, result: ReservationResult) -> "ReservationResponse":
        reservation: Reservation = result.reservation
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            vehicle_id=reservation.vehicle_id,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            start_time=reservation.start_time,
            end_time=reservation.end_time,
            pickup_location=reservation.pickup_location,
            return_location=reservation.return_location,
            status=reservation.status.value,
            tariff=reservation.tariff.value,
            total_price=to_money(reservation.total_price),
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
            payment=PaymentSummary.from_payment(result.payment) if result.payment else None,
            price=PriceBreakdownResponse.from_calculation(result.price) if result.price else None,
        )


class AvailabilityResponse(BaseModel):
    start_date: date
    end_date: date
    booked_vehicle_ids: list[str]


class OverlappingReservation(BaseModel):
    id: str
    start_date: date
    end_date: date
    status: str


class OverlappingReservationsResponse(BaseModel):
    vehicle_id: str
    start_date: date
    end_date: date
    reservations: list[OverlappingReservation]


class VehicleResponse(ApiModel):
    id: str
    name: str
    type: str
    category: str
    price_per_day: Decimal
    available: bool
    location: str
    seats: int
    booked: bool = False

    @classmethod
    def from_availability(cls, item: VehicleAvailability) -> "VehicleResponse":
        vehicle = item.vehicle
        return cls(
            id=vehicle.id,
            name=vehicle.name,
            type=vehicle.type,
            category=vehicle.category,
            price_per_day=to_money(vehicle.price_per_day),
            available=vehicle.available,
            location=vehicle.location,
            seats=vehicle.seats,
            booked=item.booked,
        )


class TariffResponse(ApiModel):
    id: str
    name: str
    description: str
    rate: Decimal

    @classmethod
    def from_config(cls, tariff: TariffConfig) -> "TariffResponse":
        return cls(id=tariff.id.value, name=tariff.name, description=tariff.description, rate=tariff.rate)


class QuoteResponse(PriceBreakdownResponse):
    vehicle_id: str | None = None
    tariff: str
    price_per_day: Decimal
    currency: str

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "QuoteResponse":
        breakdown = PriceBreakdownResponse.from_calculation(quote.calculation)
        return cls(
            **breakdown.model_dump(),
            vehicle_id=quote.vehicle_id,
            tariff=quote.tariff,
            price_per_day=to_money(quote.price_per_day),
            currency=quote.currency,
        )


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: dict = Field(default_factory=dict)
