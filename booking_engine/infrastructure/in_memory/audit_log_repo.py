import threading

from booking_engine.application.interfaces.audit_log_repo import AuditLogRepo
from booking_engine.domain.entities.audit_entry import AuditEntry


class InMemoryAuditLogRepo(AuditLogRepo):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[AuditEntry] = []

    async def append(self, entry: AuditEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> list[AuditEntry]:
        with self._lock:
            return list(self._entries)
