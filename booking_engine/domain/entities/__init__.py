"""Entidades del dominio de reservaciones."""

from booking_engine.domain.entities.audit_entry import AuditAction, AuditEntry
from booking_engine.domain.entities.customer import Customer, normalize_email
from booking_engine.domain.entities.reservation import (
    ACTIVE_STATUSES,
    ALLOWED_TRANSITIONS,
    ApprovalStatus,
    PaymentOption,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)
from booking_engine.domain.entities.unit import Unit

__all__ = [
    # Reservation
    "Reservation",
    "ReservationStatus",
    "PaymentStatus",
    "ApprovalStatus",
    "PaymentOption",
    "ACTIVE_STATUSES",
    "ALLOWED_TRANSITIONS",
    # Customer
    "Customer",
    "normalize_email",
    # Unit
    "Unit",
    # Audit
    "AuditAction",
    "AuditEntry",
]
