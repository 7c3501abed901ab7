from datetime import date
from decimal import Decimal

from app.application.dtos.reservation_dto import PriceQuote
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.domain.errors import ValidationError, VehicleNotFoundError
from app.domain.pricing import calculate_price, get_tariff


class QuotePriceUseCase:
    """
    Cotización de precio sin crear reservación.

    Si se indica vehicle_id se usa la tarifa diaria actual del vehículo; si no,
    el llamante debe enviar price_per_day.
    """

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        transaction_manager: TransactionManager,
        currency_code: str = "EUR",
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._transaction_manager = transaction_manager
        self._currency_code = currency_code

    async def execute(
        self,
        start_date: date | None,
        end_date: date | None,
        tariff: str | None = None,
        vehicle_id: str | None = None,
        price_per_day: Decimal | None = None,
    ) -> PriceQuote:
        if vehicle_id:
            async with self._transaction_manager.start():
                vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(vehicle_id)
            price_per_day = vehicle.price_per_day
        elif price_per_day is None:
            raise ValidationError("price_per_day", "se requiere vehicle_id o price_per_day")
        elif price_per_day < 0:
            raise ValidationError("price_per_day", "no puede ser negativo")

        resolved = get_tariff(tariff)
        return PriceQuote(
            price_per_day=price_per_day,
            calculation=calculate_price(price_per_day, start_date, end_date, resolved.id),
            tariff=resolved.id.value,
            vehicle_id=vehicle_id,
            currency=self._currency_code,
        )
