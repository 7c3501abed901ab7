"""Reglas de validación compartidas por los casos de uso de reservaciones."""

import hashlib
import json
import re
from datetime import date
from typing import Any, Iterable

from app.domain.entities.payment import PaymentMethod
from app.domain.entities.reservation import Reservation, ReservationStatus, Tariff
from app.domain.errors import ValidationError

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def hash_request(payload: dict[str, Any]) -> str:
    normalized = json.dumps(payload, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(normalized.encode()).hexdigest()


def require(field: str, value: Any) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(field, "campo requerido")


def validate_time(field: str, value: str) -> None:
    if not _TIME_PATTERN.match(value):
        raise ValidationError(field, f"formato de hora inválido (HH:MM): {value!r}")


def ensure_not_in_past(start_date: date, today: date) -> None:
    if start_date < today:
        raise ValidationError("start_date", f"la fecha de inicio {start_date} ya pasó (hoy es {today})")


def parse_tariff(value: str) -> Tariff:
    try:
        return Tariff(value)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in Tariff)
        raise ValidationError("tariff", f"tarifa desconocida {value!r}; permitidas: {allowed}") from exc


def parse_payment_method(value: str) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError as exc:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(
            "payment_method", f"método de pago desconocido {value!r}; permitidos: {allowed}"
        ) from exc


def parse_status(value: str) -> ReservationStatus:
    try:
        return ReservationStatus(value)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in ReservationStatus)
        raise ValidationError("status", f"estado desconocido {value!r}; permitidos: {allowed}") from exc


def describe_conflicts(reservations: Iterable[Reservation]) -> list[dict]:
    return [
        {
            "id": reservation.id,
            "start_date": reservation.start_date.isoformat(),
            "end_date": reservation.end_date.isoformat(),
        }
        for reservation in reservations
    ]
