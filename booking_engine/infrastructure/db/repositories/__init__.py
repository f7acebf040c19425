from booking_engine.infrastructure.db.repositories.audit_log_repo_sql import AuditLogRepoSQL
from booking_engine.infrastructure.db.repositories.customer_repo_sql import CustomerRepoSQL
from booking_engine.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from booking_engine.infrastructure.db.repositories.unit_repo_sql import UnitRepoSQL

__all__ = [
    "AuditLogRepoSQL",
    "CustomerRepoSQL",
    "ReservationRepoSQL",
    "UnitRepoSQL",
]
