from datetime import date

from fastapi import APIRouter, Depends, Header, Query, status

from app.api.dependencies import get_caller, get_use_cases
from app.api.schemas.reservations import (
    AvailabilityResponse,
    CreateReservationRequest,
    EditReservationRequest,
    ErrorResponse,
    ReservationResponse,
)
from app.application.dtos.reservation_dto import CreateReservationCommand, EditReservationCommand
from app.domain.policies import CallerIdentity

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "/reservations/availability",
    response_model=AvailabilityResponse,
    responses={400: {"model": ErrorResponse}},
)
async def booked_vehicles(
    start_date: date = Query(...),
    end_date: date = Query(...),
    use_cases=Depends(get_use_cases),
) -> AvailabilityResponse:
    booked = await use_cases["check_availability"].booked_vehicle_ids(start_date, end_date)
    return AvailabilityResponse(start_date=start_date, end_date=end_date, booked_vehicle_ids=booked)


@router.post(
    "/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 409: {"model": ErrorResponse}},
)
async def create_reservation(
    payload: CreateReservationRequest,
    idem_key: str | None = Header(default=None, convert_underscores=False, alias="Idempotency-Key"),
    caller: CallerIdentity | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["create_reservation"].execute(
        caller=caller,
        command=CreateReservationCommand(**payload.model_dump()),
        idem_key=idem_key,
    )
    return ReservationResponse.from_result(result)


@router.get("/reservations", response_model=list[ReservationResponse], responses={401: {"model": ErrorResponse}})
async def list_reservations(
    caller: CallerIdentity | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    results = await use_cases["list_reservations"].execute(caller=caller)
    return [ReservationResponse.from_result(result) for result in results]


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse, responses=_ERRORS)
async def get_reservation(
    reservation_id: str,
    caller: CallerIdentity | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["get_reservation"].execute(caller=caller, reservation_id=reservation_id)
    return ReservationResponse.from_result(result)


@router.put("/reservations/{reservation_id}", response_model=ReservationResponse, responses=_ERRORS)
async def edit_reservation(
    reservation_id: str,
    payload: EditReservationRequest,
    caller: CallerIdentity | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["edit_reservation"].execute(
        caller=caller,
        reservation_id=reservation_id,
        command=EditReservationCommand(**payload.model_dump()),
    )
    return ReservationResponse.from_result(result)


@router.delete("/reservations/{reservation_id}", response_model=ReservationResponse, responses=_ERRORS)
async def cancel_reservation(
    reservation_id: str,
    caller: CallerIdentity | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    result = await use_cases["cancel_reservation"].execute(caller=caller, reservation_id=reservation_id)
    return ReservationResponse.from_result(result)
