from booking_engine.domain.entities.audit_entry import AuditEntry


class AuditLogRepo:
    """Almacén append-only; el motor nunca lee ni modifica entradas."""

    async def append(self, entry: AuditEntry) -> None:
        raise NotImplementedError
