"""
Availability Checker.

Responde qué reservaciones activas ocupan un vehículo en un rango de fechas
y qué vehículos de la flota están reservados en ese rango.
"""

from datetime import date

from app.application.interfaces.reservation_repo import ReservationRepo
from app.domain.entities.reservation import Reservation
from app.domain.value_objects.date_range import DateRange


class AvailabilityChecker:
    """
    Consultas de disponibilidad sobre las reservaciones activas.

    El repositorio puede prefiltrar candidatos; el predicado de superposición
    de DateRange se vuelve a aplicar aquí y es el que decide.
    """

    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def find_overlapping(
        self,
        vehicle_id: str,
        range_start: date,
        range_end: date,
        exclude_reservation_id: str | None = None,
    ) -> list[Reservation]:
        """
        Reservaciones activas del vehículo que se superponen con el rango.

        Raises:
            InvalidDateRangeError: Si range_start no es anterior a range_end.
        """
        window = DateRange(start=range_start, end=range_end)
        candidates = await self._reservation_repo.list_active_in_range(window, vehicle_id=vehicle_id)
        return sorted(
            (
                reservation
                for reservation in candidates
                if reservation.vehicle_id == vehicle_id
                and reservation.id != exclude_reservation_id
                and reservation.is_active
                and reservation.date_range.overlaps(window)
            ),
            key=lambda r: (r.start_date, r.id),
        )

    async def list_booked_vehicle_ids(self, range_start: date, range_end: date) -> set[str]:
        """Ids de vehículos con al menos una reservación activa en el rango."""
        window = DateRange(start=range_start, end=range_end)
        candidates = await self._reservation_repo.list_active_in_range(window)
        return {
            reservation.vehicle_id
            for reservation in candidates
            if reservation.is_active and reservation.date_range.overlaps(window)
        }
