from app.domain.entities.payment import Payment


class PaymentRepo:
    async def create(self, payment: Payment) -> None:
        raise NotImplementedError

    async def get_by_reservation(self, reservation_id: str) -> Payment | None:
        raise NotImplementedError

    async def update(self, payment: Payment) -> None:
        raise NotImplementedError
