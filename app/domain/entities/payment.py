"""Entidad Payment - pago asociado 1:1 a una reservación."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class PaymentStatus(str, Enum):
    """Estados posibles de un pago."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    """Métodos de pago soportados."""

    CREDIT_CARD = "CREDIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"


@dataclass
class Payment:
    """
    Pago de una reservación.

    Se crea junto con la reservación y su monto refleja el total_price de la
    reservación en ese momento.
    """

    id: str
    reservation_id: str
    user_id: str
    amount: Decimal
    payment_method: PaymentMethod
    currency: str = "EUR"
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == PaymentStatus.PENDING

    def refund(self) -> None:
        """Marca el pago como reembolsado (acompaña la cancelación de la reservación)."""
        self.status = PaymentStatus.REFUNDED

    def follow_total(self, amount: Decimal) -> None:
        """Actualiza el monto mientras el pago sigue pendiente."""
        if self.is_pending:
            self.amount = amount

    @classmethod
    def create_pending(
        cls,
        payment_id: str,
        reservation_id: str,
        user_id: str,
        amount: Decimal,
        payment_method: PaymentMethod,
        currency: str,
        created_at: datetime | None = None,
    ) -> "Payment":
        """Factory para crear un pago pendiente."""
        return cls(
            id=payment_id,
            reservation_id=reservation_id,
            user_id=user_id,
            amount=amount,
            payment_method=payment_method,
            currency=currency,
            status=PaymentStatus.PENDING,
            created_at=created_at,
            updated_at=created_at,
        )
