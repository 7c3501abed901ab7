import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from app.api.deps import engine  # noqa: E402
from app.infrastructure.db.tables import metadata  # noqa: E402
from app.infrastructure.seed import seed_sql  # noqa: E402


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created missing tables.")

        inserted = await seed_sql(conn)
        print(f"Seeded {inserted} demo vehicles.")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
