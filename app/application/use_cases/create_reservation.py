import logging
from dataclasses import asdict

from app.application.dtos.reservation_dto import CreateReservationCommand, ReservationResult
from app.application.interfaces.clock import Clock
from app.application.interfaces.id_generator import IdGenerator
from app.application.interfaces.idempotency_repo import IdempotencyRecord, IdempotencyRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_lock import VehicleLock
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.application.services.availability_checker import AvailabilityChecker
from app.application.use_cases.reservation_rules import (
    describe_conflicts,
    ensure_not_in_past,
    hash_request,
    parse_payment_method,
    parse_tariff,
    require,
    validate_time,
)
from app.domain.entities.payment import Payment
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    IdempotencyConflictError,
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

_REQUIRED_FIELDS = (
    "vehicle_id",
    "start_date",
    "end_date",
    "start_time",
    "end_time",
    "pickup_location",
    "return_location",
    "tariff",
    "payment_method",
)


class CreateReservationUseCase:
    """
    Admisión de una nueva reservación.

    Gates en orden (el primero que falla decide):
    1. El rol del llamante puede reservar.
    2. Campos requeridos, fecha de inicio no pasada, fin posterior al inicio.
    3. El vehículo existe y está habilitado.
    4. No hay reservaciones activas superpuestas.
    5. Tarifa y método de pago válidos.
    6. Reservación y pago se crean en una sola transacción.

    Los pasos 3 a 6 corren con el lock del vehículo tomado y dentro de la
    misma transacción, reintentada ante deadlocks.
    """

    SCOPE = "RESERVATION_CREATE"

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        reservation_repo: ReservationRepo,
        payment_repo: PaymentRepo,
        idempotency_repo: IdempotencyRepo,
        transaction_manager: TransactionManager,
        vehicle_lock: VehicleLock,
        clock: Clock,
        id_generator: IdGenerator,
        currency_code: str = "EUR",
        max_attempts: int = 3,
        retry_base_delay: float = 0.1,
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._reservation_repo = reservation_repo
        self._payment_repo = payment_repo
        self._idempotency_repo = idempotency_repo
        self._transaction_manager = transaction_manager
        self._vehicle_lock = vehicle_lock
        self._clock = clock
        self._id_generator = id_generator
        self._currency_code = currency_code
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay
        self._availability = AvailabilityChecker(reservation_repo)
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        caller: CallerIdentity | None,
        command: CreateReservationCommand,
        idem_key: str | None = None,
    ) -> ReservationResult:
        if caller is None or not caller.can(Capability.RESERVE):
            raise UnauthorizedError()

        request_hash = None
        if idem_key:
            request_hash = hash_request({"user_id": caller.user_id, **asdict(command)})
            replay = await self._replay(idem_key, request_hash)
            if replay is not None:
                return replay

        window = self._validate(command)

        async with self._vehicle_lock.hold(command.vehicle_id):
            result = await retry_on_deadlock(
                lambda: self._admit(caller, command, window, idem_key, request_hash),
                max_attempts=self._max_attempts,
                base_delay=self._retry_base_delay,
            )

        self._logger.info(
            "Reservation created",
            extra={
                "reservation_id": result.reservation.id,
                "vehicle_id": result.reservation.vehicle_id,
                "user_id": caller.user_id,
                "total_price": str(result.reservation.total_price),
            },
        )
        return result

    def _validate(self, command: CreateReservationCommand) -> DateRange:
        for field_name in _REQUIRED_FIELDS:
            require(field_name, getattr(command, field_name))
        validate_time("start_time", command.start_time)
        validate_time("end_time", command.end_time)
        ensure_not_in_past(command.start_date, self._clock.today())
        return DateRange(start=command.start_date, end=command.end_date)

    async def _replay(self, idem_key: str, request_hash: str) -> ReservationResult | None:
        async with self._transaction_manager.start():
            existing = await self._idempotency_repo.get(scope=self.SCOPE, idem_key=idem_key)
            if existing is None:
                return None
            if existing.request_hash != request_hash:
                raise IdempotencyConflictError(idem_key, self.SCOPE)

            reservation_id = existing.reference_reservation_id
            reservation = await self._reservation_repo.get_by_id(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            payment = await self._payment_repo.get_by_reservation(reservation_id)

        self._logger.info(
            "Idempotent replay of reservation create",
            extra={"reservation_id": reservation_id, "idem_key": idem_key},
        )
        return ReservationResult(reservation=reservation, payment=payment)

    async def _admit(
        self,
        caller: CallerIdentity,
        command: CreateReservationCommand,
        window: DateRange,
        idem_key: str | None,
        request_hash: str | None,
    ) -> ReservationResult:
        async with self._transaction_manager.start():
            vehicle = await self._vehicle_repo.get_for_update(command.vehicle_id)
            if vehicle is None:
                raise VehicleNotFoundError(command.vehicle_id)
            if not vehicle.available:
                raise VehicleUnavailableError(vehicle.id)

            conflicts = await self._availability.find_overlapping(vehicle.id, window.start, window.end)
            if conflicts:
                self._logger.info(
                    "Reservation rejected: overlapping reservations",
                    extra={
                        "vehicle_id": vehicle.id,
                        "window": str(window),
                        "conflicts": [r.id for r in conflicts],
                    },
                )
                raise ReservationConflictError(vehicle.id, describe_conflicts(conflicts))

            tariff = parse_tariff(command.tariff)
            payment_method = parse_payment_method(command.payment_method)

            price = calculate_price(vehicle.price_per_day, window.start, window.end, tariff)
            if command.total_price is not None and command.total_price != price.total_price:
                self._logger.warning(
                    "Client total_price ignored; using server-computed total",
                    extra={
                        "vehicle_id": vehicle.id,
                        "client_total": str(command.total_price),
                        "server_total": str(price.total_price),
                    },
                )

            now = self._clock.now()
            reservation = Reservation.create_pending(
                reservation_id=self._id_generator.reservation_id(),
                user_id=caller.user_id,
                vehicle_id=vehicle.id,
                date_range=window,
                start_time=command.start_time,
                end_time=command.end_time,
                pickup_location=command.pickup_location.strip(),
                return_location=command.return_location.strip(),
                tariff=tariff,
                total_price=price.total_price,
                created_at=now,
            )
            await self._reservation_repo.create(reservation)

            payment = Payment.create_pending(
                payment_id=self._id_generator.payment_id(),
                reservation_id=reservation.id,
                user_id=caller.user_id,
                amount=reservation.total_price,
                payment_method=payment_method,
                currency=self._currency_code,
                created_at=now,
            )
            await self._payment_repo.create(payment)

            if idem_key:
                await self._idempotency_repo.save(
                    IdempotencyRecord(
                        scope=self.SCOPE,
                        idem_key=idem_key,
                        request_hash=request_hash,
                        response_json={
                            "reservation_id": reservation.id,
                            "total_price": str(reservation.total_price),
                        },
                        http_status=201,
                        reference_reservation_id=reservation.id,
                    )
                )

        return ReservationResult(reservation=reservation, payment=payment, price=price, vehicle=vehicle)
