"""Almacén in-memory compartido por los repositorios in-memory."""

import copy
from datetime import date
from typing import Any

from app.application.interfaces.idempotency_repo import IdempotencyRecord
from app.domain.entities.payment import Payment
from app.domain.entities.reservation import Reservation
from app.domain.entities.vehicle import Vehicle


class InMemoryStore:
    """
    Estado completo de la persistencia in-memory.

    booked_days replica la restricción única (vehicle_id, day) de la tabla
    reservation_days.
    """

    def __init__(self) -> None:
        self.vehicles: dict[str, Vehicle] = {}
        self.reservations: dict[str, Reservation] = {}
        self.payments: dict[str, Payment] = {}
        self.booked_days: dict[tuple[str, date], str] = {}
        self.idempotency: dict[tuple[str, str], IdempotencyRecord] = {}

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self.__dict__)

    def restore(self, snapshot: dict[str, Any]) -> None:
        self.__dict__.update(snapshot)

    def clear(self) -> None:
        """Limpia todos los datos (para testing)."""
        self.__init__()
