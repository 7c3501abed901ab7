from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_use_cases
from app.api.schemas.reservations import ErrorResponse, QuoteResponse, TariffResponse
from app.domain.pricing import list_tariffs

router = APIRouter()


@router.get("/tariffs", response_model=list[TariffResponse])
async def get_tariffs() -> list[TariffResponse]:
    return [TariffResponse.from_config(tariff) for tariff in list_tariffs()]


@router.get(
    "/pricing/quote",
    response_model=QuoteResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def quote_price(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    tariff: str | None = Query(default=None),
    vehicle_id: str | None = Query(default=None),
    price_per_day: Decimal | None = Query(default=None),
    use_cases=Depends(get_use_cases),
) -> QuoteResponse:
    quote = await use_cases["quote_price"].execute(
        start_date=start_date,
        end_date=end_date,
        tariff=tariff,
        vehicle_id=vehicle_id,
        price_per_day=price_per_day,
    )
    return QuoteResponse.from_quote(quote)
