import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from app.application.interfaces.transaction_manager import TransactionManager
from app.infrastructure.in_memory.store import InMemoryStore

_active_transactions: ContextVar[frozenset[int]] = ContextVar(
    "in_memory_active_transactions", default=frozenset()
)


class InMemoryTransactionManager(TransactionManager):
    """
    Serializable transactions over an InMemoryStore.

    One transaction runs at a time; on error the store is restored to the
    snapshot taken at start. Nested start() calls join the outer transaction.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        active = _active_transactions.get()
        if id(self) in active:
            yield
            return

        async with self._lock:
            snapshot = self._store.snapshot()
            token = _active_transactions.set(active | {id(self)})
            try:
                yield
            except BaseException:
                self._store.restore(snapshot)
                raise
            finally:
                _active_transactions.reset(token)
