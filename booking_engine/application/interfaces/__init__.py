"""Puertos (interfaces) de la capa de aplicación."""

from booking_engine.application.interfaces.audit_log_repo import AuditLogRepo
from booking_engine.application.interfaces.clock import Clock, FakeClock, SystemClock
from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.application.interfaces.notifier import Notifier
from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.interfaces.unit_repo import UnitRepo

__all__ = [
    # Repositories
    "AuditLogRepo",
    "CustomerRepo",
    "ReservationRepo",
    "UnitRepo",
    # Gateways
    "Notifier",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
