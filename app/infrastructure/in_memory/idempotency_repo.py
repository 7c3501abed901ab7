from app.application.interfaces.idempotency_repo import IdempotencyRecord, IdempotencyRepo
from app.domain.errors import IdempotencyConflictError
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryIdempotencyRepo(IdempotencyRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, scope: str, idem_key: str) -> IdempotencyRecord | None:
        return self._store.idempotency.get((scope, idem_key))

    async def save(self, record: IdempotencyRecord) -> None:
        key = (record.scope, record.idem_key)
        if key in self._store.idempotency:
            raise IdempotencyConflictError(record.idem_key, record.scope)
        self._store.idempotency[key] = record
