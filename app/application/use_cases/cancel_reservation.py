import logging

from app.application.dtos.reservation_dto import ReservationResult
from app.application.interfaces.clock import Clock
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.errors import AccessDeniedError, ReservationNotFoundError, UnauthorizedError
from app.domain.policies import CallerIdentity
from app.infrastructure.db.retry import retry_on_deadlock


class CancelReservationUseCase:
    """Cancela una reservación activa y reembolsa su pago en la misma transacción."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        payment_repo: PaymentRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        max_attempts: int = 3,
        retry_base_delay: float = 0.1,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay
        self._logger = logging.getLogger(__name__)

    async def execute(self, caller: CallerIdentity | None, reservation_id: str) -> ReservationResult:
        if caller is None:
            raise UnauthorizedError()

        result = await retry_on_deadlock(
            lambda: self._cancel(caller, reservation_id),
            max_attempts=self._max_attempts,
            base_delay=self._retry_base_delay,
        )
        self._logger.info(
            "Reservation cancelled",
            extra={
                "reservation_id": reservation_id,
                "user_id": caller.user_id,
                "payment_status": result.payment.status.value if result.payment else None,
            },
        )
        return result

    async def _cancel(self, caller: CallerIdentity, reservation_id: str) -> ReservationResult:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get_by_id(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            if not caller.owns_or_manages(reservation.user_id):
                raise AccessDeniedError(reservation_id)

            reservation.cancel()
            now = self._clock.now()
            reservation.updated_at = now
            await self._reservation_repo.update(reservation)

            payment = await self._payment_repo.get_by_reservation(reservation.id)
            if payment is not None:
                payment.refund()
                payment.updated_at = now
                await self._payment_repo.update(payment)

        return ReservationResult(reservation=reservation, payment=payment)
