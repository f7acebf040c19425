"""Adaptadores in-memory para testing y modo demo (USE_IN_MEMORY=true)."""

from booking_engine.infrastructure.in_memory.audit_log_repo import InMemoryAuditLogRepo
from booking_engine.infrastructure.in_memory.customer_repo import InMemoryCustomerRepo
from booking_engine.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from booking_engine.infrastructure.in_memory.transaction_manager import NoopTransactionManager
from booking_engine.infrastructure.in_memory.unit_repo import InMemoryUnitRepo

__all__ = [
    "InMemoryAuditLogRepo",
    "InMemoryCustomerRepo",
    "InMemoryReservationRepo",
    "InMemoryUnitRepo",
    "NoopTransactionManager",
]
