from dataclasses import replace

from app.application.interfaces.payment_repo import PaymentRepo
from app.domain.entities.payment import Payment
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryPaymentRepo(PaymentRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create(self, payment: Payment) -> None:
        if payment.reservation_id in self._store.payments:
            raise ValueError("Payment already exists for reservation")
        self._store.payments[payment.reservation_id] = replace(payment)

    async def get_by_reservation(self, reservation_id: str) -> Payment | None:
        payment = self._store.payments.get(reservation_id)
        return replace(payment) if payment else None

    async def update(self, payment: Payment) -> None:
        if payment.reservation_id not in self._store.payments:
            raise ValueError("Payment not found")
        self._store.payments[payment.reservation_id] = replace(payment)
