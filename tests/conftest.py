"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Bundle in-memory con reloj fijo e ids predecibles
- Identidades de llamante (miembros y staff)
- Base de datos SQLite in-memory para los repositorios SQL
- Cliente HTTP de prueba (FastAPI TestClient)
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.dependencies import build_in_memory_bundle, build_use_cases, get_use_cases
from app.application.dtos.reservation_dto import CreateReservationCommand
from app.application.interfaces.clock import FakeClock
from app.application.interfaces.id_generator import FakeIdGenerator
from app.config import Settings
from app.domain.entities.vehicle import Vehicle
from app.domain.policies import CallerIdentity, Role
from app.infrastructure.db.tables import metadata
from app.infrastructure.seed import seed_sql
from app.main import app

# "Hoy" para todas las pruebas: las reservaciones usan fechas de enero 2030
FIXED_NOW = datetime(2030, 1, 1, 9, 0, tzinfo=timezone.utc)


# ============================================================================
# CONFIGURACIÓN Y BUNDLE IN-MEMORY
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(
        use_in_memory=True,
        seed_demo_data=True,
        admission_max_attempts=3,
        admission_retry_base_delay=0.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def bundle(settings: Settings, clock: FakeClock) -> dict:
    """Store in-memory sembrado con la flota de demo (vehicle-1 .. vehicle-7)."""
    bundle = build_in_memory_bundle(settings, clock=clock)
    bundle["id_generator"] = FakeIdGenerator()
    bundle["vehicle_repo"].add(
        Vehicle(
            id="vehicle-off",
            name="Retired Van",
            price_per_day=Decimal("40.00"),
            available=False,
            location="Berlin Central",
            category="VAN",
        )
    )
    return bundle


@pytest.fixture
def use_cases(settings: Settings, bundle: dict) -> dict:
    return build_use_cases(settings, bundle)


# ============================================================================
# IDENTIDADES
# ============================================================================

@pytest.fixture
def member() -> CallerIdentity:
    return CallerIdentity(user_id="user-1", role=Role.MEMBER)


@pytest.fixture
def other_member() -> CallerIdentity:
    return CallerIdentity(user_id="user-2", role=Role.MEMBER)


@pytest.fixture
def employee() -> CallerIdentity:
    return CallerIdentity(user_id="staff-1", role=Role.EMPLOYEE)


# ============================================================================
# DATOS DE PRUEBA
# ============================================================================

@pytest.fixture
def make_command():
    """
    Fábrica de comandos de creación.

    Por defecto: vehicle-1 (35.00/día) del 10 al 12 de enero de 2030, BASIC.
    """
    def _make(**overrides) -> CreateReservationCommand:
        values = {
            "vehicle_id": "vehicle-1",
            "start_date": date(2030, 1, 10),
            "end_date": date(2030, 1, 12),
            "start_time": "10:00",
            "end_time": "18:00",
            "pickup_location": "Berlin Central",
            "return_location": "Berlin Central",
            "tariff": "BASIC",
            "payment_method": "CREDIT_CARD",
        }
        values.update(overrides)
        return CreateReservationCommand(**values)

    return _make


@pytest.fixture
def reservation_payload() -> dict:
    """Payload HTTP equivalente al comando por defecto."""
    return {
        "vehicle_id": "vehicle-1",
        "start_date": "2030-01-10",
        "end_date": "2030-01-12",
        "start_time": "10:00",
        "end_time": "18:00",
        "pickup_location": "Berlin Central",
        "return_location": "Berlin Central",
        "tariff": "BASIC",
        "payment_method": "CREDIT_CARD",
    }


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================

@pytest_asyncio.fixture
async def sql_engine():
    """
    SQLite in-memory con una sola conexión compartida (StaticPool).

    Tablas creadas y flota de demo sembrada.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await seed_sql(conn)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(sql_engine) -> async_sessionmaker:
    return async_sessionmaker(sql_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================

@pytest.fixture
def client(use_cases: dict) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient con los casos de uso del bundle in-memory del test.
    """
    app.dependency_overrides[get_use_cases] = lambda: use_cases

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
