import logging

from app.application.dtos.reservation_dto import EditReservationCommand, ReservationResult
from app.application.interfaces.clock import Clock
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_lock import VehicleLock
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.application.services.availability_checker import AvailabilityChecker
from app.application.use_cases.reservation_rules import (
    describe_conflicts,
    ensure_not_in_past,
    parse_payment_method,
    parse_status,
    parse_tariff,
    require,
    validate_time,
)
from app.domain.entities.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from app.domain.errors import (
    AccessDeniedError,
    ReservationConflictError,
    ReservationNotFoundError,
    UnauthorizedError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from app.domain.policies import CallerIdentity, Capability
from app.domain.pricing import calculate_price
from app.domain.value_objects.date_range import DateRange
from app.infrastructure.db.retry import retry_on_deadlock


class EditReservationUseCase:
    """
    Modifica el subconjunto mutable de una reservación existente.

    - Solo el dueño o el staff pueden editar.
    - Solo reservaciones PENDING o CONFIRMED son editables.
    - El chequeo de superposición excluye a la propia reservación.
    - La fecha de inicio no puede quedar en el pasado si se cambia.
    - El precio se recalcula en el servidor si cambian fechas o tarifa.
    - El cambio de estado es exclusivo del staff.
    """

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        reservation_repo: ReservationRepo,
        payment_repo: PaymentRepo,
        transaction_manager: TransactionManager,
        vehicle_lock: VehicleLock,
        clock: Clock,
        max_attempts: int = 3,
        retry_base_delay: float = 0.1,
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._reservation_repo = reservation_repo
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager
        self._vehicle_lock = vehicle_lock
        self._clock = clock
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay
        self._availability = AvailabilityChecker(reservation_repo)
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        caller: CallerIdentity | None,
        reservation_id: str,
        command: EditReservationCommand,
    ) -> ReservationResult:
        if caller is None:
            raise UnauthorizedError()

        async with self._transaction_manager.start():
            current = await self._load_for(caller, reservation_id)
        current.ensure_editable("editar")

        target_status = parse_status(command.status) if command.status is not None else None
        if target_status is not None and target_status != current.status:
            if not caller.can(Capability.OVERRIDE_STATUS):
                raise UnauthorizedError("Solo el staff puede cambiar el estado de una reservación")

        async with self._vehicle_lock.hold(current.vehicle_id):
            result = await retry_on_deadlock(
                lambda: self._apply(caller, reservation_id, command, target_status),
                max_attempts=self._max_attempts,
                base_delay=self._retry_base_delay,
            )

        self._logger.info(
            "Reservation updated",
            extra={
                "reservation_id": reservation_id,
                "user_id": caller.user_id,
                "status": result.reservation.status.value,
                "total_price": str(result.reservation.total_price),
            },
        )
        return result

    async def _load_for(self, caller: CallerIdentity, reservation_id: str) -> Reservation:
        reservation = await self._reservation_repo.get_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        if not caller.owns_or_manages(reservation.user_id):
            raise AccessDeniedError(reservation_id)
        return reservation

    async def _apply(
        self,
        caller: CallerIdentity,
        reservation_id: str,
        command: EditReservationCommand,
        target_status: ReservationStatus | None,
    ) -> ReservationResult:
        async with self._transaction_manager.start():
            # Se relee dentro de la transacción: el estado pudo cambiar
            reservation = await self._load_for(caller, reservation_id)
            reservation.ensure_editable("editar")

            start_date = command.start_date or reservation.start_date
            end_date = command.end_date or reservation.end_date
            if command.start_date is not None and command.start_date != reservation.start_date:
                ensure_not_in_past(command.start_date, self._clock.today())
            window = DateRange(start=start_date, end=end_date)
            dates_changed = window != reservation.date_range

            for field_name in ("start_time", "end_time"):
                value = getattr(command, field_name)
                if value is not None:
                    validate_time(field_name, value)
            for field_name in ("pickup_location", "return_location"):
                value = getattr(command, field_name)
                if value is not None:
                    require(field_name, value)

            vehicle = await self._vehicle_repo.get_for_update(reservation.vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(reservation.vehicle_id)
            if dates_changed and not vehicle.available:
                raise VehicleUnavailableError(vehicle.id)

            stays_active = target_status is None or target_status in ACTIVE_STATUSES
            if stays_active:
                conflicts = await self._availability.find_overlapping(
                    vehicle.id, window.start, window.end, exclude_reservation_id=reservation.id
                )
                if conflicts:
                    raise ReservationConflictError(vehicle.id, describe_conflicts(conflicts))

            tariff = parse_tariff(command.tariff) if command.tariff is not None else reservation.tariff
            payment_method = (
                parse_payment_method(command.payment_method)
                if command.payment_method is not None
                else None
            )

            price = None
            if dates_changed or tariff != reservation.tariff:
                price = calculate_price(vehicle.price_per_day, window.start, window.end, tariff)
                reservation.total_price = price.total_price
            if command.total_price is not None and command.total_price != reservation.total_price:
                self._logger.warning(
                    "Client total_price ignored; using server-computed total",
                    extra={
                        "reservation_id": reservation.id,
                        "client_total": str(command.total_price),
                        "server_total": str(reservation.total_price),
                    },
                )

            reservation.start_date = window.start
            reservation.end_date = window.end
            reservation.tariff = tariff
            if command.start_time is not None:
                reservation.start_time = command.start_time
            if command.end_time is not None:
                reservation.end_time = command.end_time
            if command.pickup_location is not None:
                reservation.pickup_location = command.pickup_location.strip()
            if command.return_location is not None:
                reservation.return_location = command.return_location.strip()
            if target_status is not None and target_status != reservation.status:
                reservation.override_status(target_status)

            now = self._clock.now()
            reservation.updated_at = now
            await self._reservation_repo.update(reservation)

            payment = await self._payment_repo.get_by_reservation(reservation.id)
            if payment is not None:
                if payment_method is not None:
                    payment.payment_method = payment_method
                if price is not None:
                    payment.follow_total(reservation.total_price)
                if reservation.status == ReservationStatus.CANCELLED:
                    payment.refund()
                payment.updated_at = now
                await self._payment_repo.update(payment)

        return ReservationResult(reservation=reservation, payment=payment, price=price, vehicle=vehicle)
