"""Value Object DateRange - rango de fechas de una reservación."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta

from app.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class DateRange:
    """
    Value Object inmutable que representa un rango cerrado de fechas.

    Ambos extremos son días de calendario incluidos en el rango: una
    reservación que termina el día D y otra que empieza el día D se
    superponen.

    Attributes:
        start: Fecha de inicio (pickup).
        end: Fecha de fin (return).
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidDateRangeError(self.start, self.end)

    def overlaps(self, other: "DateRange") -> bool:
        """Verifica si este rango se superpone con otro (intervalo cerrado)."""
        return self.start <= other.end and self.end >= other.start

    def days(self) -> Iterator[date]:
        """Itera todos los días de calendario del rango, extremos incluidos."""
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
