import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.domain.errors import StoreUnavailableError
from booking_engine.infrastructure.db.retry import retry_on_deadlock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLAlchemyTransactionManager(TransactionManager):
    def __init__(self, session: AsyncSession, max_attempts: int = 3) -> None:
        self._session = session
        self._max_attempts = max_attempts

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._session.in_transaction():
            yield
        else:
            async with self._session.begin():
                yield

    async def run(self, work: Callable[[], Awaitable[T]]) -> T:
        """
        Run `work` in its own transaction, retrying on deadlocks.

        Driver errors are logged and surfaced as StoreUnavailableError; domain
        errors raised by `work` roll the transaction back and propagate as-is.
        """

        async def attempt() -> T:
            async with self.start():
                return await work()

        try:
            return await retry_on_deadlock(attempt, max_attempts=self._max_attempts)
        except SQLAlchemyError as exc:
            logger.error("Database operation failed", exc_info=exc)
            raise StoreUnavailableError("database") from exc
