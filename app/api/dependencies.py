from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AsyncSessionLocal
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.id_generator import RealIdGenerator
from app.application.use_cases.cancel_reservation import CancelReservationUseCase
from app.application.use_cases.check_availability import CheckAvailabilityUseCase
from app.application.use_cases.create_reservation import CreateReservationUseCase
from app.application.use_cases.edit_reservation import EditReservationUseCase
from app.application.use_cases.query_reservations import (
    GetReservationUseCase,
    ListReservationsUseCase,
)
from app.application.use_cases.quote_price import QuotePriceUseCase
from app.application.use_cases.search_vehicles import SearchVehiclesUseCase
from app.config import Settings, get_settings
from app.domain.errors import UnauthorizedError
from app.domain.policies import CallerIdentity, Role
from app.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from app.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from app.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from app.infrastructure.db.repositories.vehicle_repo_sql import VehicleRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.in_memory import (
    InMemoryIdempotencyRepo,
    InMemoryPaymentRepo,
    InMemoryReservationRepo,
    InMemoryStore,
    InMemoryTransactionManager,
    InMemoryVehicleRepo,
)
from app.infrastructure.seed import seed_in_memory
from app.infrastructure.vehicle_lock import InProcessVehicleLock


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


def build_in_memory_bundle(settings: Settings, clock: Clock | None = None) -> dict:
    store = InMemoryStore()
    vehicle_repo = InMemoryVehicleRepo(store)
    if settings.seed_demo_data:
        seed_in_memory(vehicle_repo)
    return {
        "store": store,
        "vehicle_repo": vehicle_repo,
        "reservation_repo": InMemoryReservationRepo(store),
        "payment_repo": InMemoryPaymentRepo(store),
        "idempotency_repo": InMemoryIdempotencyRepo(store),
        "tx_manager": InMemoryTransactionManager(store),
        "vehicle_lock": InProcessVehicleLock(),
        "clock": clock or SystemClock(),
        "id_generator": RealIdGenerator(),
    }


@lru_cache(maxsize=1)
def _in_memory_bundle():
    return build_in_memory_bundle(get_settings())


@lru_cache(maxsize=1)
def _sql_vehicle_lock() -> InProcessVehicleLock:
    # Compartido entre requests; las sesiones SQL no lo son
    return InProcessVehicleLock()


def build_use_cases(settings: Settings, bundle: dict) -> dict:
    retry_options = {
        "max_attempts": settings.admission_max_attempts,
        "retry_base_delay": settings.admission_retry_base_delay,
    }
    return {
        "create_reservation": CreateReservationUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            reservation_repo=bundle["reservation_repo"],
            payment_repo=bundle["payment_repo"],
            idempotency_repo=bundle["idempotency_repo"],
            transaction_manager=bundle["tx_manager"],
            vehicle_lock=bundle["vehicle_lock"],
            clock=bundle["clock"],
            id_generator=bundle["id_generator"],
            currency_code=settings.currency_code,
            **retry_options,
        ),
        "edit_reservation": EditReservationUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            reservation_repo=bundle["reservation_repo"],
            payment_repo=bundle["payment_repo"],
            transaction_manager=bundle["tx_manager"],
            vehicle_lock=bundle["vehicle_lock"],
            clock=bundle["clock"],
            **retry_options,
        ),
        "cancel_reservation": CancelReservationUseCase(
            reservation_repo=bundle["reservation_repo"],
            payment_repo=bundle["payment_repo"],
            transaction_manager=bundle["tx_manager"],
            clock=bundle["clock"],
            **retry_options,
        ),
        "check_availability": CheckAvailabilityUseCase(
            reservation_repo=bundle["reservation_repo"],
            transaction_manager=bundle["tx_manager"],
        ),
        "list_reservations": ListReservationsUseCase(
            reservation_repo=bundle["reservation_repo"],
            payment_repo=bundle["payment_repo"],
            transaction_manager=bundle["tx_manager"],
        ),
        "get_reservation": GetReservationUseCase(
            reservation_repo=bundle["reservation_repo"],
            payment_repo=bundle["payment_repo"],
            transaction_manager=bundle["tx_manager"],
        ),
        "search_vehicles": SearchVehiclesUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            reservation_repo=bundle["reservation_repo"],
            transaction_manager=bundle["tx_manager"],
        ),
        "quote_price": QuotePriceUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            transaction_manager=bundle["tx_manager"],
            currency_code=settings.currency_code,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
):
    if settings.use_in_memory:
        return build_use_cases(settings, _in_memory_bundle())

    if not session:
        raise RuntimeError("DB session not available")

    bundle = {
        "vehicle_repo": VehicleRepoSQL(session),
        "reservation_repo": ReservationRepoSQL(session),
        "payment_repo": PaymentRepoSQL(session),
        "idempotency_repo": IdempotencyRepoSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session),
        "vehicle_lock": _sql_vehicle_lock(),
        "clock": SystemClock(),
        "id_generator": RealIdGenerator(),
    }
    return build_use_cases(settings, bundle)


def get_caller(
    user_id: str | None = Header(default=None, alias="X-User-Id"),
    role: str | None = Header(default=None, alias="X-User-Role"),
) -> CallerIdentity | None:
    """
    Identity asserted by the upstream session provider.

    Missing headers mean an anonymous caller; protected use cases reject it.
    """
    if not user_id or not user_id.strip():
        return None
    try:
        parsed_role = Role((role or Role.MEMBER.value).strip().upper())
    except ValueError as exc:
        raise UnauthorizedError(f"Unknown role: {role}") from exc
    return CallerIdentity(user_id=user_id.strip(), role=parsed_role)
