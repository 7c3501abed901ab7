from datetime import date

from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.services.availability_checker import AvailabilityChecker
from app.domain.entities.reservation import Reservation


class CheckAvailabilityUseCase:
    """Consultas de disponibilidad de solo lectura (sin locks)."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._transaction_manager = transaction_manager
        self._availability = AvailabilityChecker(reservation_repo)

    async def booked_vehicle_ids(self, start_date: date, end_date: date) -> list[str]:
        async with self._transaction_manager.start():
            booked = await self._availability.list_booked_vehicle_ids(start_date, end_date)
        return sorted(booked)

    async def overlapping(
        self,
        vehicle_id: str,
        start_date: date,
        end_date: date,
        exclude_reservation_id: str | None = None,
    ) -> list[Reservation]:
        async with self._transaction_manager.start():
            return await self._availability.find_overlapping(
                vehicle_id,
                start_date,
                end_date,
                exclude_reservation_id=exclude_reservation_id,
            )
