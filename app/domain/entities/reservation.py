"""Entidad Reservation - Agregado raíz del dominio."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from app.domain.errors import InvalidReservationStatusError, ValidationError
from app.domain.value_objects.date_range import DateRange


class ReservationStatus(str, Enum):
    """Estados posibles de una reservación."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class Tariff(str, Enum):
    """Tarifas disponibles."""

    BASIC = "BASIC"
    DISCOUNTED = "DISCOUNTED"
    EXCLUSIVE = "EXCLUSIVE"


# Solo estas reservaciones bloquean el vehículo
ACTIVE_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})

EDITABLE_STATUSES = ACTIVE_STATUSES

# Destinos permitidos para el override administrativo del staff
STAFF_TARGET_STATUSES = frozenset(
    {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED, ReservationStatus.COMPLETED}
)

STATUS_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CANCELLED, ReservationStatus.COMPLETED}),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.COMPLETED: frozenset(),
}


@dataclass
class Reservation:
    """
    Entidad principal del dominio - Agregado Raíz.

    Representa la reservación de un vehículo por un usuario en un rango de
    fechas. Las horas (start_time/end_time) son informativas: la detección de
    superposición opera solo sobre fechas.
    """

    id: str
    user_id: str
    vehicle_id: str
    start_date: date
    end_date: date
    start_time: str
    end_time: str
    pickup_location: str
    return_location: str
    tariff: Tariff = Tariff.BASIC
    total_price: Decimal = Decimal("0")
    status: ReservationStatus = ReservationStatus.PENDING

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def date_range(self) -> DateRange:
        """Retorna el rango de fechas como Value Object."""
        return DateRange(start=self.start_date, end=self.end_date)

    @property
    def is_active(self) -> bool:
        """Verifica si la reservación bloquea el vehículo."""
        return self.status in ACTIVE_STATUSES

    @property
    def is_editable(self) -> bool:
        return self.status in EDITABLE_STATUSES

    def can_transition_to(self, target: ReservationStatus) -> bool:
        """Verifica si la transición sigue la máquina de estados normal."""
        return target in STATUS_TRANSITIONS[self.status]

    # === Métodos de negocio ===

    def ensure_editable(self, operation: str) -> None:
        if not self.is_editable:
            raise InvalidReservationStatusError(
                current_status=self.status.value,
                expected_status=[s.value for s in sorted(EDITABLE_STATUSES)],
                operation=operation,
            )

    def cancel(self) -> None:
        """Cancela la reservación."""
        self.ensure_editable("cancelar")
        self.status = ReservationStatus.CANCELLED

    def override_status(self, target: ReservationStatus) -> None:
        """
        Cambio de estado administrativo (solo staff).

        El staff puede llevar una reservación editable directamente a
        CONFIRMED, CANCELLED o COMPLETED.
        """
        self.ensure_editable("cambiar estado")
        if target not in STAFF_TARGET_STATUSES:
            raise ValidationError("status", f"estado destino no permitido: {target.value}")
        self.status = target

    @classmethod
    def create_pending(
        cls,
        reservation_id: str,
        user_id: str,
        vehicle_id: str,
        date_range: DateRange,
        start_time: str,
        end_time: str,
        pickup_location: str,
        return_location: str,
        tariff: Tariff,
        total_price: Decimal,
        created_at: datetime | None = None,
    ) -> "Reservation":
        """Factory para crear una reservación PENDING."""
        return cls(
            id=reservation_id,
            user_id=user_id,
            vehicle_id=vehicle_id,
            start_date=date_range.start,
            end_date=date_range.end,
            start_time=start_time,
            end_time=end_time,
            pickup_location=pickup_location,
            return_location=return_location,
            tariff=tariff,
            total_price=total_price,
            status=ReservationStatus.PENDING,
            created_at=created_at,
            updated_at=created_at,
        )
