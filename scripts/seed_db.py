import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import insert, select  # noqa: E402

from booking_engine.config import get_settings  # noqa: E402
from booking_engine.infrastructure.db.engine import build_engine  # noqa: E402
from booking_engine.infrastructure.db.tables import metadata, units  # noqa: E402
from booking_engine.infrastructure.seed import DEMO_UNITS  # noqa: E402


async def seed():
    engine = build_engine(get_settings())
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created missing tables.")

        existing = set((await conn.execute(select(units.c.id))).scalars().all())
        rows = [
            {
                "id": unit.id,
                "name": unit.name,
                "base_price_per_night": unit.base_price_per_night,
                "cleaning_fee": unit.cleaning_fee,
                "max_occupancy": unit.max_occupancy,
                "is_active": unit.is_active,
            }
            for unit in DEMO_UNITS
            if unit.id not in existing
        ]
        if rows:
            await conn.execute(insert(units), rows)
        print(f"Seeded {len(rows)} demo units.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
