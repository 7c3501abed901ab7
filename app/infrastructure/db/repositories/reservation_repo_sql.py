import logging
from typing import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.reservation_repo import ReservationRepo
from app.domain.entities.reservation import (
    ACTIVE_STATUSES,
    Reservation,
    ReservationStatus,
    Tariff,
)
from app.domain.errors import ReservationConflictError
from app.domain.value_objects.date_range import DateRange
from app.infrastructure.db.tables import reservation_days, reservations

logger = logging.getLogger(__name__)

_ACTIVE_VALUES = [status.value for status in ACTIVE_STATUSES]


def _to_reservation(row) -> Reservation:
    return Reservation(
        id=row["id"],
        user_id=row["user_id"],
        vehicle_id=row["vehicle_id"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        pickup_location=row["pickup_location"],
        return_location=row["return_location"],
        status=ReservationStatus(row["status"]),
        tariff=Tariff(row["tariff"]),
        total_price=row["total_price"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _values(reservation: Reservation) -> dict:
    return {
        "user_id": reservation.user_id,
        "vehicle_id": reservation.vehicle_id,
        "start_date": reservation.start_date,
        "end_date": reservation.end_date,
        "start_time": reservation.start_time,
        "end_time": reservation.end_time,
        "pickup_location": reservation.pickup_location,
        "return_location": reservation.return_location,
        "status": reservation.status.value,
        "tariff": reservation.tariff.value,
        "total_price": reservation.total_price,
        "created_at": reservation.created_at,
        "updated_at": reservation.updated_at,
    }


class ReservationRepoSQL(ReservationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_reservation(row) if row else None

    async def list_all(self) -> Sequence[Reservation]:
        stmt = select(reservations).order_by(reservations.c.created_at.desc())
        result = await self._session.execute(stmt)
        return [_to_reservation(row) for row in result.mappings().all()]

    async def list_by_user(self, user_id: str) -> Sequence[Reservation]:
        stmt = (
            select(reservations)
            .where(reservations.c.user_id == user_id)
            .order_by(reservations.c.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_to_reservation(row) for row in result.mappings().all()]

    async def list_active_in_range(
        self,
        window: DateRange,
        vehicle_id: str | None = None,
    ) -> Sequence[Reservation]:
        where_clause = [
            reservations.c.status.in_(_ACTIVE_VALUES),
            reservations.c.start_date <= window.end,
            reservations.c.end_date >= window.start,
        ]
        if vehicle_id is not None:
            where_clause.append(reservations.c.vehicle_id == vehicle_id)
        result = await self._session.execute(select(reservations).where(*where_clause))
        return [_to_reservation(row) for row in result.mappings().all()]

    async def create(self, reservation: Reservation) -> None:
        stmt = insert(reservations).values(id=reservation.id, **_values(reservation))
        await self._session.execute(stmt)
        if reservation.is_active:
            await self._claim_days(reservation)

    async def update(self, reservation: Reservation) -> None:
        values = _values(reservation)
        values.pop("created_at")
        stmt = update(reservations).where(reservations.c.id == reservation.id).values(values)
        await self._session.execute(stmt)
        await self._session.execute(
            delete(reservation_days).where(reservation_days.c.reservation_id == reservation.id)
        )
        if reservation.is_active:
            await self._claim_days(reservation)

    async def _claim_days(self, reservation: Reservation) -> None:
        rows = [
            {
                "vehicle_id": reservation.vehicle_id,
                "day": day,
                "reservation_id": reservation.id,
            }
            for day in reservation.date_range.days()
        ]
        try:
            await self._session.execute(insert(reservation_days), rows)
        except IntegrityError as exc:
            logger.warning(
                "Booked-day constraint rejected reservation",
                extra={
                    "reservation_id": reservation.id,
                    "vehicle_id": reservation.vehicle_id,
                    "start_date": reservation.start_date.isoformat(),
                    "end_date": reservation.end_date.isoformat(),
                },
            )
            raise ReservationConflictError(reservation.vehicle_id) from exc
