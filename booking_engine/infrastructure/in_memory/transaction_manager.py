from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from booking_engine.application.interfaces.transaction_manager import TransactionManager

T = TypeVar("T")


class NoopTransactionManager(TransactionManager):
    """Los repositorios in-memory son atómicos por operación; no hay nada que confirmar."""

    @asynccontextmanager
    async def start(self):
        yield

    async def run(self, work: Callable[[], Awaitable[T]]) -> T:
        return await work()
