"""Interface TransactionManager - Puerto para unidades de trabajo atómicas."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class TransactionManager(Protocol):
    """
    Delimita una unidad de trabajo sobre los repositorios.

    Todo lo escrito dentro de `start()` se confirma junto o se descarta junto
    si el bloque lanza. Un `start()` anidado se une a la transacción externa.
    """

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
