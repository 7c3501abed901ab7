"""Interface IdGenerator - Puerto para generación de identificadores."""

import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """
    Puerto para generación de identificadores de reservaciones y pagos.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def reservation_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def payment_id(self) -> str:
        raise NotImplementedError


class RealIdGenerator(IdGenerator):
    """Identificadores con prefijo y 8 caracteres hex en mayúsculas. Ejemplo: RES-1A2B3C4D"""

    def _generate(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"

    def reservation_id(self) -> str:
        return self._generate("RES")

    def payment_id(self) -> str:
        return self._generate("PAY")


class FakeIdGenerator(IdGenerator):
    """
    Implementación fake para testing.

    Genera valores predecibles basados en contadores.
    """

    def __init__(self) -> None:
        self._reservation_counter = 0
        self._payment_counter = 0

    def reservation_id(self) -> str:
        self._reservation_counter += 1
        return f"RES-{self._reservation_counter:04d}"

    def payment_id(self) -> str:
        self._payment_counter += 1
        return f"PAY-{self._payment_counter:04d}"

    def reset(self) -> None:
        self._reservation_counter = 0
        self._payment_counter = 0
