from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import get_settings

settings = get_settings()

# Ensure we have a valid URL or fallback to memory for dev/test if not set
DB_URL = settings.database_url or "sqlite+aiosqlite:///:memory:"

_engine_options = {"echo": settings.sql_echo}
if DB_URL.startswith("sqlite") and ":memory:" in DB_URL:
    # A single shared connection keeps the in-memory database alive
    _engine_options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
elif not DB_URL.startswith("sqlite"):
    _engine_options.update(pool_pre_ping=True, pool_recycle=3600)

engine = create_async_engine(DB_URL, **_engine_options)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
