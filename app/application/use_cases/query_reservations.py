from app.application.dtos.reservation_dto import ReservationResult
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.errors import AccessDeniedError, ReservationNotFoundError, UnauthorizedError
from app.domain.policies import CallerIdentity, Capability


class ListReservationsUseCase:
    """Los miembros ven sus reservaciones; el staff ve todas. Más recientes primero."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        payment_repo: PaymentRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager

    async def execute(self, caller: CallerIdentity | None) -> list[ReservationResult]:
        if caller is None:
            raise UnauthorizedError()

        async with self._transaction_manager.start():
            if caller.can(Capability.VIEW_ALL_RESERVATIONS):
                reservations = await self._reservation_repo.list_all()
            else:
                reservations = await self._reservation_repo.list_by_user(caller.user_id)
            results = []
            for reservation in reservations:
                payment = await self._payment_repo.get_by_reservation(reservation.id)
                results.append(ReservationResult(reservation=reservation, payment=payment))
        return results


class GetReservationUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        payment_repo: PaymentRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager

    async def execute(self, caller: CallerIdentity | None, reservation_id: str) -> ReservationResult:
        if caller is None:
            raise UnauthorizedError()

        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get_by_id(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            if not caller.owns_or_manages(reservation.user_id):
                raise AccessDeniedError(reservation_id)
            payment = await self._payment_repo.get_by_reservation(reservation_id)
        return ReservationResult(reservation=reservation, payment=payment)
