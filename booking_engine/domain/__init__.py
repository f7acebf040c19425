"""
Capa de Dominio - Motor de Reservaciones y Precios.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Entidades del dominio (Reservation, Customer, Unit, AuditEntry)
- value_objects/: Objetos de valor inmutables (StayRange, PriceBreakdown, ReservationNumber)
- cancellation_policy.py: Política de reembolso por cancelación
- errors.py: Excepciones específicas del dominio
"""

from booking_engine.domain.cancellation_policy import CancellationPolicy, RefundQuote
from booking_engine.domain.entities import (
    ACTIVE_STATUSES,
    ALLOWED_TRANSITIONS,
    ApprovalStatus,
    AuditAction,
    AuditEntry,
    Customer,
    PaymentOption,
    PaymentStatus,
    Reservation,
    ReservationStatus,
    Unit,
    normalize_email,
)
from booking_engine.domain.errors import (
    DomainError,
    DuplicateCustomerError,
    InvalidDateRangeError,
    InvalidReservationStatusError,
    OptimisticLockError,
    PricingMismatchError,
    PricingValidationError,
    ReservationNotFoundError,
    ReservationNumberConflictError,
    StoreUnavailableError,
    UnitNotAvailableError,
    UnitNotFoundError,
    ValidationError,
)
from booking_engine.domain.value_objects import PriceBreakdown, ReservationNumber, StayRange

__all__ = [
    # Policies
    "CancellationPolicy",
    "RefundQuote",
    # Entities
    "Reservation",
    "ReservationStatus",
    "PaymentStatus",
    "ApprovalStatus",
    "PaymentOption",
    "ACTIVE_STATUSES",
    "ALLOWED_TRANSITIONS",
    "Customer",
    "normalize_email",
    "Unit",
    "AuditAction",
    "AuditEntry",
    # Value Objects
    "PriceBreakdown",
    "ReservationNumber",
    "StayRange",
    # Errors
    "DomainError",
    "ValidationError",
    "InvalidDateRangeError",
    "PricingValidationError",
    "UnitNotFoundError",
    "UnitNotAvailableError",
    "PricingMismatchError",
    "ReservationNotFoundError",
    "ReservationNumberConflictError",
    "InvalidReservationStatusError",
    "OptimisticLockError",
    "DuplicateCustomerError",
    "StoreUnavailableError",
]
