"""Value Objects del dominio de reservaciones."""

from app.domain.value_objects.date_range import DateRange

__all__ = [
    "DateRange",
]
