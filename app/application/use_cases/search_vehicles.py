from datetime import date

from app.application.dtos.reservation_dto import VehicleAvailability
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.application.services.availability_checker import AvailabilityChecker
from app.domain.errors import ValidationError


class SearchVehiclesUseCase:
    """
    Lista la flota con una marca `booked` por vehículo.

    Sin rango de fechas ningún vehículo se marca como reservado. Los filtros
    de categoría y ubicación no distinguen mayúsculas.
    """

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._transaction_manager = transaction_manager
        self._availability = AvailabilityChecker(reservation_repo)

    async def execute(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        category: str | None = None,
        location: str | None = None,
        only_available: bool = False,
    ) -> list[VehicleAvailability]:
        if (start_date is None) != (end_date is None):
            missing = "end_date" if end_date is None else "start_date"
            raise ValidationError(missing, "se requieren ambas fechas para filtrar por disponibilidad")

        async with self._transaction_manager.start():
            vehicles = await self._vehicle_repo.list_all()
            booked: set[str] = set()
            if start_date is not None:
                booked = await self._availability.list_booked_vehicle_ids(start_date, end_date)

        results = []
        for vehicle in vehicles:
            if category and vehicle.category.lower() != category.lower():
                continue
            if location and vehicle.location.lower() != location.lower():
                continue
            is_booked = vehicle.id in booked
            if only_available and (is_booked or not vehicle.available):
                continue
            results.append(VehicleAvailability(vehicle=vehicle, booked=is_booked))
        return results
