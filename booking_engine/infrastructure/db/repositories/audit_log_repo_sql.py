from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.audit_log_repo import AuditLogRepo
from booking_engine.domain.entities.audit_entry import AuditEntry
from booking_engine.infrastructure.db.tables import audit_logs


class AuditLogRepoSQL(AuditLogRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, entry: AuditEntry) -> None:
        created_at = entry.created_at
        await self._session.execute(
            insert(audit_logs).values(
                action=entry.action,
                actor_id=entry.actor_id,
                actor_email=entry.actor_email,
                details=entry.details,
                created_at=created_at.replace(tzinfo=None) if created_at else None,
            )
        )
