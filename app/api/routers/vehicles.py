from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_use_cases
from app.api.schemas.reservations import (
    ErrorResponse,
    OverlappingReservation,
    OverlappingReservationsResponse,
    VehicleResponse,
)

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleResponse], responses={400: {"model": ErrorResponse}})
async def search_vehicles(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    category: str | None = Query(default=None),
    location: str | None = Query(default=None),
    only_available: bool = Query(default=False),
    use_cases=Depends(get_use_cases),
) -> list[VehicleResponse]:
    items = await use_cases["search_vehicles"].execute(
        start_date=start_date,
        end_date=end_date,
        category=category,
        location=location,
        only_available=only_available,
    )
    return [VehicleResponse.from_availability(item) for item in items]


@router.get(
    "/vehicles/{vehicle_id}/reservations/overlapping",
    response_model=OverlappingReservationsResponse,
    responses={400: {"model": ErrorResponse}},
)
async def overlapping_reservations(
    vehicle_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    exclude_reservation_id: str | None = Query(default=None),
    use_cases=Depends(get_use_cases),
) -> OverlappingReservationsResponse:
    reservations = await use_cases["check_availability"].overlapping(
        vehicle_id,
        start_date,
        end_date,
        exclude_reservation_id=exclude_reservation_id,
    )
    return OverlappingReservationsResponse(
        vehicle_id=vehicle_id,
        start_date=start_date,
        end_date=end_date,
        reservations=[
            OverlappingReservation(
                id=r.id,
                start_date=r.start_date,
                end_date=r.end_date,
                status=r.status.value,
            )
            for r in reservations
        ],
    )
