"""Integrity Guard: rechaza precios enviados por el cliente que no coinciden."""

import logging
from decimal import Decimal

from booking_engine.application.result import Err, Ok, Result
from booking_engine.application.services.audit import AuditLogWriter
from booking_engine.domain.entities.audit_entry import AuditAction
from booking_engine.domain.errors import PricingMismatchError
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown

logger = logging.getLogger(__name__)

PRICE_TOLERANCE = Decimal("1")


class IntegrityGuard:
    def __init__(self, audit_writer: AuditLogWriter, tolerance: Decimal = PRICE_TOLERANCE) -> None:
        self._audit_writer = audit_writer
        self._tolerance = Decimal(tolerance)

    def mismatched_fields(self, submitted: PriceBreakdown, expected: PriceBreakdown) -> list[str]:
        """Campos cuya diferencia absoluta excede la tolerancia."""
        return [
            name
            for name in PriceBreakdown.COMPARED_FIELDS
            if abs(Decimal(getattr(submitted, name)) - Decimal(getattr(expected, name)))
            > self._tolerance
        ]

    async def verify(
        self, submitted: PriceBreakdown, expected: PriceBreakdown, unit_id: int
    ) -> Result[PriceBreakdown]:
        """
        Retorna el desglose del servidor si el enviado coincide.

        En caso contrario escribe exactamente una entrada de auditoría y retorna
        un error genérico que no revela los montos esperados.
        """
        mismatched = self.mismatched_fields(submitted, expected)
        if not mismatched:
            return Ok(expected)

        logger.warning(
            "Price mismatch detected",
            extra={"unit_id": unit_id, "fields": mismatched},
        )
        await self._audit_writer.write(
            AuditAction.PRICE_MANIPULATION_ATTEMPT,
            details=f"Price mismatch detected for unit {unit_id}",
        )
        return Err(PricingMismatchError(unit_id))
