"""Audit Log Writer: registro best-effort de eventos sensibles."""

import asyncio
import logging

from booking_engine.application.interfaces.audit_log_repo import AuditLogRepo
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.domain.entities.audit_entry import AuditAction, AuditEntry

logger = logging.getLogger(__name__)


class AuditLogWriter:
    """
    Agrega entradas al log de auditoría.

    Cualquier fallo (incluido el timeout) se registra y se descarta: la
    auditoría nunca altera el resultado de la operación de negocio.
    """

    def __init__(
        self,
        audit_log_repo: AuditLogRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        store_timeout_seconds: float = 5.0,
    ) -> None:
        self._audit_log_repo = audit_log_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._timeout = store_timeout_seconds

    async def write(
        self,
        action: AuditAction | str,
        actor_id: str | None = None,
        actor_email: str | None = None,
        details: str | None = None,
    ) -> None:
        action_value = action.value if isinstance(action, AuditAction) else action
        entry = AuditEntry(
            action=action_value,
            actor_id=actor_id,
            actor_email=actor_email,
            details=details,
            created_at=self._clock.now(),
        )
        try:
            await asyncio.wait_for(
                self._transaction_manager.run(lambda: self._audit_log_repo.append(entry)),
                timeout=self._timeout,
            )
        except Exception:
            logger.exception("Failed to write audit log", extra={"action": action_value})
