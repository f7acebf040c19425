"""
Resultados explícitos para las etapas del pipeline de reservación.

Cada etapa retorna `Ok(valor)` o `Err(DomainError)`; el orquestador corta en el
primer `Err` en lugar de depender de excepciones para el flujo esperado.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from booking_engine.domain.errors import DomainError, StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: DomainError

    @property
    def code(self) -> str:
        return self.error.code


Result = Union[Ok[T], Err]


async def guard_store(
    awaitable: Awaitable[T],
    *,
    timeout: float,
    operation: str,
    expected: tuple[type[DomainError], ...] = (),
) -> Result[T]:
    """
    Ejecuta una llamada al almacén con timeout y la convierte en Result.

    - Timeout o StoreUnavailableError -> Err(StoreUnavailableError), detalle solo en logs.
    - Errores de dominio listados en `expected` (ej. traslape detectado por el
      almacén) -> Err con ese error.
    - Cualquier otra excepción se propaga: es un bug, no un resultado.
    """
    try:
        return Ok(await asyncio.wait_for(awaitable, timeout=timeout))
    except asyncio.TimeoutError:
        logger.error(
            "Store call timed out",
            extra={"operation": operation, "timeout_seconds": timeout},
        )
        return Err(StoreUnavailableError(operation))
    except StoreUnavailableError as exc:
        logger.error("Store call failed", exc_info=exc, extra={"operation": operation})
        return Err(exc)
    except expected as exc:
        return Err(exc)
