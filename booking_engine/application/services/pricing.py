"""Cálculo de precio autoritativo del servidor."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from booking_engine.application.result import Err, Ok, Result
from booking_engine.domain.entities.unit import Unit
from booking_engine.domain.errors import PricingValidationError
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown

TAX_RATE = Decimal("0.075")
WHOLE_UNIT = Decimal("1")


class PricingCalculator:
    """
    Única fuente de montos cobrables.

    base = precio por noche * noches; limpieza es tarifa fija por estancia;
    el impuesto se redondea half-up a unidades enteras de moneda.
    """

    def __init__(self, tax_rate: Decimal = TAX_RATE) -> None:
        self._tax_rate = Decimal(tax_rate)

    @property
    def tax_rate(self) -> Decimal:
        return self._tax_rate

    def calculate(
        self,
        unit: Unit,
        check_in: date,
        check_out: date,
        guest_count: int,
        discount_amount: Decimal = Decimal("0"),
    ) -> Result[PriceBreakdown]:
        nights = (check_out - check_in).days
        if nights <= 0:
            return Err(PricingValidationError("Check-out date must be after check-in date"))

        if guest_count > unit.max_occupancy:
            return Err(
                PricingValidationError(f"Maximum {unit.max_occupancy} guests allowed for this unit")
            )

        discount = Decimal(discount_amount)
        if discount < 0:
            return Err(PricingValidationError("Discount cannot be negative"))

        base = Decimal(unit.base_price_per_night) * nights
        cleaning = Decimal(unit.cleaning_fee)
        subtotal = base + cleaning - discount
        if subtotal < 0:
            return Err(PricingValidationError("Discount cannot exceed the stay subtotal"))

        tax = (subtotal * self._tax_rate).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)

        return Ok(
            PriceBreakdown(
                base_amount=base,
                cleaning_fee=cleaning,
                tax_amount=tax,
                discount_amount=discount,
                total_amount=subtotal + tax,
                nights=nights,
            )
        )
