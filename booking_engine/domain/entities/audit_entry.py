"""Entidad AuditEntry - registro append-only de eventos sensibles."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AuditAction(str, Enum):
    BOOKING_CREATED = "booking.created"
    BOOKING_CANCELLED = "booking.cancelled"
    PRICE_MANIPULATION_ATTEMPT = "booking.price_manipulation_attempt"


@dataclass(frozen=True)
class AuditEntry:
    action: str
    actor_id: str | None = None
    actor_email: str | None = None
    details: str | None = None
    created_at: datetime | None = None
    id: int | None = None
