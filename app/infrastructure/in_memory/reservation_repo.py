from dataclasses import replace
from typing import Sequence

from app.application.interfaces.reservation_repo import ReservationRepo
from app.domain.entities.reservation import Reservation
from app.domain.errors import ReservationConflictError
from app.domain.value_objects.date_range import DateRange
from app.infrastructure.in_memory.store import InMemoryStore


def _newest_first(items: list[Reservation]) -> list[Reservation]:
    return sorted(items, key=lambda r: (r.created_at is not None, r.created_at), reverse=True)


class InMemoryReservationRepo(ReservationRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        reservation = self._store.reservations.get(reservation_id)
        return replace(reservation) if reservation else None

    async def list_all(self) -> Sequence[Reservation]:
        return [replace(r) for r in _newest_first(list(self._store.reservations.values()))]

    async def list_by_user(self, user_id: str) -> Sequence[Reservation]:
        owned = [r for r in self._store.reservations.values() if r.user_id == user_id]
        return [replace(r) for r in _newest_first(owned)]

    async def list_active_in_range(
        self,
        window: DateRange,
        vehicle_id: str | None = None,
    ) -> Sequence[Reservation]:
        return [
            replace(r)
            for r in self._store.reservations.values()
            if r.is_active
            and (vehicle_id is None or r.vehicle_id == vehicle_id)
            and r.date_range.overlaps(window)
        ]

    async def create(self, reservation: Reservation) -> None:
        if reservation.id in self._store.reservations:
            raise ValueError("Reservation id already exists")
        if reservation.is_active:
            self._claim_days(reservation)
        self._store.reservations[reservation.id] = replace(reservation)

    async def update(self, reservation: Reservation) -> None:
        if reservation.id not in self._store.reservations:
            raise ValueError("Reservation not found")
        if reservation.is_active:
            self._claim_days(reservation)
        else:
            self._release_days(reservation.id)
        self._store.reservations[reservation.id] = replace(reservation)

    def _release_days(self, reservation_id: str) -> None:
        for key in [k for k, owner in self._store.booked_days.items() if owner == reservation_id]:
            del self._store.booked_days[key]

    def _claim_days(self, reservation: Reservation) -> None:
        keys = [(reservation.vehicle_id, day) for day in reservation.date_range.days()]
        holders = {
            self._store.booked_days[key]
            for key in keys
            if self._store.booked_days.get(key, reservation.id) != reservation.id
        }
        if holders:
            conflicts = [
                {
                    "id": holder.id,
                    "start_date": holder.start_date.isoformat(),
                    "end_date": holder.end_date.isoformat(),
                }
                for holder in (self._store.reservations[h] for h in sorted(holders))
            ]
            raise ReservationConflictError(reservation.vehicle_id, conflicts)

        self._release_days(reservation.id)
        for key in keys:
            self._store.booked_days[key] = reservation.id
