"""
Integration tests de admisión sobre los repositorios SQL (SQLite in-memory).

Verifica que la misma lógica de casos de uso funciona con SQLAlchemy y que la
restricción única de reservation_days rechaza el doble booking aunque el
chequeo de superposición se salte.
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.api.dependencies import build_use_cases
from app.application.dtos.reservation_dto import EditReservationCommand
from app.application.interfaces.id_generator import FakeIdGenerator
from app.domain.entities.payment import PaymentStatus
from app.domain.entities.reservation import Reservation, ReservationStatus, Tariff
from app.domain.errors import IdempotencyConflictError, ReservationConflictError
from app.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from app.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from app.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from app.infrastructure.db.repositories.vehicle_repo_sql import VehicleRepoSQL
from app.infrastructure.db.tables import reservation_days
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.vehicle_lock import InProcessVehicleLock

pytestmark = pytest.mark.integration


@pytest.fixture
def sql_bundle(db_session, clock) -> dict:
    return {
        "vehicle_repo": VehicleRepoSQL(db_session),
        "reservation_repo": ReservationRepoSQL(db_session),
        "payment_repo": PaymentRepoSQL(db_session),
        "idempotency_repo": IdempotencyRepoSQL(db_session),
        "tx_manager": SQLAlchemyTransactionManager(db_session),
        "vehicle_lock": InProcessVehicleLock(),
        "clock": clock,
        "id_generator": FakeIdGenerator(),
    }


@pytest.fixture
def sql_use_cases(settings, sql_bundle) -> dict:
    return build_use_cases(settings, sql_bundle)


async def _booked_days(session, reservation_id: str) -> int:
    async with session.begin():
        result = await session.execute(
            select(func.count()).select_from(reservation_days).where(
                reservation_days.c.reservation_id == reservation_id
            )
        )
        return result.scalar_one()


class TestSqlAdmission:
    @pytest.mark.asyncio
    async def test_create_persists_reservation_payment_and_days(
        self, sql_use_cases, sql_bundle, db_session, member, make_command
    ):
        result = await sql_use_cases["create_reservation"].execute(caller=member, command=make_command())

        assert result.reservation.id == "RES-0001"
        assert result.reservation.total_price == Decimal("70")

        async with sql_bundle["tx_manager"].start():
            stored = await sql_bundle["reservation_repo"].get_by_id("RES-0001")
            payment = await sql_bundle["payment_repo"].get_by_reservation("RES-0001")

        assert stored.status == ReservationStatus.PENDING
        assert stored.start_date == date(2030, 1, 10)
        assert stored.total_price == Decimal("70")
        assert payment.amount == Decimal("70")
        assert payment.status == PaymentStatus.PENDING
        # 10, 11 y 12 de enero (intervalo cerrado)
        assert await _booked_days(db_session, "RES-0001") == 3

    @pytest.mark.asyncio
    async def test_overlap_is_rejected(self, sql_use_cases, member, other_member, make_command):
        await sql_use_cases["create_reservation"].execute(caller=member, command=make_command())

        with pytest.raises(ReservationConflictError) as exc_info:
            await sql_use_cases["create_reservation"].execute(
                caller=other_member,
                command=make_command(start_date=date(2030, 1, 12), end_date=date(2030, 1, 14)),
            )

        assert exc_info.value.conflicts == [
            {"id": "RES-0001", "start_date": "2030-01-10", "end_date": "2030-01-12"}
        ]

    @pytest.mark.asyncio
    async def test_cancel_releases_days(self, sql_use_cases, db_session, member, other_member, make_command):
        created = await sql_use_cases["create_reservation"].execute(caller=member, command=make_command())

        cancelled = await sql_use_cases["cancel_reservation"].execute(
            caller=member, reservation_id=created.reservation.id
        )

        assert cancelled.reservation.status == ReservationStatus.CANCELLED
        assert cancelled.payment.status == PaymentStatus.REFUNDED
        assert await _booked_days(db_session, created.reservation.id) == 0

        rebooked = await sql_use_cases["create_reservation"].execute(caller=other_member, command=make_command())
        assert rebooked.reservation.id == "RES-0002"

    @pytest.mark.asyncio
    async def test_edit_excludes_itself_and_reclaims_days(
        self, sql_use_cases, db_session, member, make_command
    ):
        created = await sql_use_cases["create_reservation"].execute(caller=member, command=make_command())

        result = await sql_use_cases["edit_reservation"].execute(
            caller=member,
            reservation_id=created.reservation.id,
            command=EditReservationCommand(start_date=date(2030, 1, 11), end_date=date(2030, 1, 14)),
        )

        assert result.reservation.total_price == Decimal("105")
        assert result.payment.amount == Decimal("105")
        assert await _booked_days(db_session, created.reservation.id) == 4

    @pytest.mark.asyncio
    async def test_idempotent_replay(self, sql_use_cases, member, make_command):
        create = sql_use_cases["create_reservation"]

        first = await create.execute(caller=member, command=make_command(), idem_key="sql-key")
        replay = await create.execute(caller=member, command=make_command(), idem_key="sql-key")

        assert replay.reservation.id == first.reservation.id
        assert replay.payment.id == first.payment.id

        with pytest.raises(IdempotencyConflictError):
            await create.execute(caller=member, command=make_command(vehicle_id="vehicle-3"), idem_key="sql-key")

    @pytest.mark.asyncio
    async def test_search_and_quote_read_sql_fleet(self, sql_use_cases, member, make_command):
        await sql_use_cases["create_reservation"].execute(caller=member, command=make_command())

        results = await sql_use_cases["search_vehicles"].execute(
            start_date=date(2030, 1, 11), end_date=date(2030, 1, 13)
        )
        assert {r.vehicle.id for r in results if r.booked} == {"vehicle-1"}
        assert len(results) == 7

        quote = await sql_use_cases["quote_price"].execute(
            start_date=date(2030, 1, 10), end_date=date(2030, 1, 12), vehicle_id="vehicle-3"
        )
        assert quote.calculation.total_price == Decimal("190")


class TestSqlBackstop:
    @pytest.mark.asyncio
    async def test_unique_day_constraint_rejects_double_booking(self, sql_bundle, member, make_command, sql_use_cases):
        await sql_use_cases["create_reservation"].execute(caller=member, command=make_command())

        intruder = Reservation(
            id="RES-RAW",
            user_id="user-2",
            vehicle_id="vehicle-1",
            start_date=date(2030, 1, 12),
            end_date=date(2030, 1, 13),
            start_time="10:00",
            end_time="18:00",
            pickup_location="Berlin Central",
            return_location="Berlin Central",
            tariff=Tariff.BASIC,
            total_price=Decimal("70"),
        )

        with pytest.raises(ReservationConflictError) as exc_info:
            async with sql_bundle["tx_manager"].start():
                await sql_bundle["reservation_repo"].create(intruder)

        assert exc_info.value.conflicts == []
        assert exc_info.value.vehicle_id == "vehicle-1"

        async with sql_bundle["tx_manager"].start():
            assert await sql_bundle["reservation_repo"].get_by_id("RES-RAW") is None

    @pytest.mark.asyncio
    async def test_inactive_reservation_claims_no_days(self, sql_bundle, db_session):
        cancelled = Reservation(
            id="RES-OLD",
            user_id="user-2",
            vehicle_id="vehicle-1",
            start_date=date(2030, 1, 12),
            end_date=date(2030, 1, 13),
            start_time="10:00",
            end_time="18:00",
            pickup_location="Berlin Central",
            return_location="Berlin Central",
            status=ReservationStatus.CANCELLED,
        )

        async with sql_bundle["tx_manager"].start():
            await sql_bundle["reservation_repo"].create(cancelled)

        assert await _booked_days(db_session, "RES-OLD") == 0
