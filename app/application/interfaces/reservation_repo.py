from typing import Sequence

from app.domain.entities.reservation import Reservation
from app.domain.value_objects.date_range import DateRange


class ReservationRepo:
    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        raise NotImplementedError

    async def list_all(self) -> Sequence[Reservation]:
        raise NotImplementedError

    async def list_by_user(self, user_id: str) -> Sequence[Reservation]:
        raise NotImplementedError

    async def list_active_in_range(
        self,
        window: DateRange,
        vehicle_id: str | None = None,
    ) -> Sequence[Reservation]:
        """
        Active (PENDING/CONFIRMED) reservations that may overlap `window`.

        Implementations may return a superset; callers re-apply the overlap
        predicate.
        """
        raise NotImplementedError

    async def create(self, reservation: Reservation) -> None:
        """
        Persist a new reservation and claim its booked days.

        Raises ReservationConflictError when another active reservation already
        holds one of the vehicle's days.
        """
        raise NotImplementedError

    async def update(self, reservation: Reservation) -> None:
        """Persist mutable fields and resync booked days with the new state."""
        raise NotImplementedError
