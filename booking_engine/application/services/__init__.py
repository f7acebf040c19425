"""Servicios de la capa de aplicación (componentes del pipeline de reservación)."""

from booking_engine.application.services.audit import AuditLogWriter
from booking_engine.application.services.availability import AvailabilityOracle
from booking_engine.application.services.customers import CustomerContactPolicy, CustomerResolver
from booking_engine.application.services.integrity import PRICE_TOLERANCE, IntegrityGuard
from booking_engine.application.services.pricing import TAX_RATE, PricingCalculator
from booking_engine.application.services.rate_limiter import (
    RateLimitDecision,
    RateLimiter,
    RateLimitRule,
)

__all__ = [
    "AuditLogWriter",
    "AvailabilityOracle",
    "CustomerContactPolicy",
    "CustomerResolver",
    "IntegrityGuard",
    "PRICE_TOLERANCE",
    "PricingCalculator",
    "RateLimitDecision",
    "RateLimitRule",
    "RateLimiter",
    "TAX_RATE",
]
