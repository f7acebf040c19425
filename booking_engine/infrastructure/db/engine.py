from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from booking_engine.config import Settings
from booking_engine.infrastructure.db.tables import metadata

SQLITE_FALLBACK_URL = "sqlite+aiosqlite:///./booking_engine.db"


def build_engine(settings: Settings) -> AsyncEngine:
    url = settings.database_url or SQLITE_FALLBACK_URL
    if url.startswith("sqlite"):
        return create_async_engine(url)
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

