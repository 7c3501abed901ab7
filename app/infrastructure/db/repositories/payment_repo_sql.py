from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.payment_repo import PaymentRepo
from app.domain.entities.payment import Payment, PaymentMethod, PaymentStatus
from app.infrastructure.db.tables import payments


def _to_payment(row) -> Payment:
    return Payment(
        id=row["id"],
        reservation_id=row["reservation_id"],
        user_id=row["user_id"],
        amount=row["amount"],
        currency=row["currency"],
        payment_method=PaymentMethod(row["payment_method"]),
        status=PaymentStatus(row["status"]),
        transaction_id=row["transaction_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PaymentRepoSQL(PaymentRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, payment: Payment) -> None:
        stmt = insert(payments).values(
            id=payment.id,
            reservation_id=payment.reservation_id,
            user_id=payment.user_id,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method.value,
            status=payment.status.value,
            transaction_id=payment.transaction_id,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )
        await self._session.execute(stmt)

    async def get_by_reservation(self, reservation_id: str) -> Payment | None:
        stmt = select(payments).where(payments.c.reservation_id == reservation_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_payment(row) if row else None

    async def update(self, payment: Payment) -> None:
        stmt = (
            update(payments)
            .where(payments.c.id == payment.id)
            .values(
                amount=payment.amount,
                payment_method=payment.payment_method.value,
                status=payment.status.value,
                transaction_id=payment.transaction_id,
                updated_at=payment.updated_at,
            )
        )
        await self._session.execute(stmt)
