from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from booking_engine.config import get_settings
from booking_engine.infrastructure.db.engine import build_engine, build_sessionmaker


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    return build_engine(get_settings())


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(get_engine())
