"""Value Object PriceBreakdown - desglose de precio de una estancia."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Desglose monetario de una reservación.

    Invariante: total_amount == base_amount + cleaning_fee + tax_amount - discount_amount.
    """

    base_amount: Decimal
    cleaning_fee: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    nights: int = 0

    COMPARED_FIELDS = ("base_amount", "cleaning_fee", "tax_amount", "total_amount")

    @property
    def subtotal(self) -> Decimal:
        return self.base_amount + self.cleaning_fee - self.discount_amount

    def is_consistent(self) -> bool:
        """Verifica la invariante del total."""
        return self.total_amount == self.subtotal + self.tax_amount
