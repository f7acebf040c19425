"""Política de cancelación: reembolso según los días restantes antes del check-in."""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


@dataclass(frozen=True)
class RefundQuote:
    percent: int
    amount: Decimal
    days_remaining: int
    message: str


@dataclass(frozen=True)
class CancellationPolicy:
    """
    Política configurable externamente.

    El reembolso total exige al menos `full_refund_days` días de calendario
    completos antes del check-in. Con los valores por defecto, cancelar 7 días
    antes devuelve todo y 6 días antes ya cae en la ventana parcial. La ventana parcial y el día reportado
    usan el conteo inclusivo, que suma el propio día de check-in: cancelar el
    mismo día deja 1 día, cancelar dos días antes deja 3.

    Attributes:
        full_refund_days: Días de calendario mínimos para reembolso total.
        partial_refund_days: Días restantes mínimos para reembolso parcial.
        partial_refund_percent: Porcentaje del monto pagado en la ventana parcial.
    """

    full_refund_days: int = 7
    partial_refund_days: int = 3
    partial_refund_percent: int = 50
    no_refund_message: str = (
        "Cancellations made less than 3 days before check-in are non-refundable."
    )

    def __post_init__(self) -> None:
        if self.partial_refund_days > self.full_refund_days:
            raise ValueError("partial_refund_days no puede exceder full_refund_days")
        if not 0 <= self.partial_refund_percent <= 100:
            raise ValueError("partial_refund_percent debe estar entre 0 y 100")

    @staticmethod
    def days_remaining(check_in: date, today: date) -> int:
        return (check_in - today).days + 1

    def quote(self, amount_paid: Decimal, check_in: date, today: date) -> RefundQuote:
        """Calcula el reembolso para una cancelación hecha en `today`."""
        days = self.days_remaining(check_in, today)

        if amount_paid <= 0:
            return RefundQuote(0, Decimal("0"), days, "No refund applicable - booking was not paid")

        if (check_in - today).days >= self.full_refund_days:
            return RefundQuote(
                100,
                amount_paid,
                days,
                f"Full refund - cancelled at least {self.full_refund_days} days before check-in",
            )

        if days >= self.partial_refund_days:
            amount = (amount_paid * self.partial_refund_percent / Decimal(100)).quantize(
                CENT, rounding=ROUND_HALF_UP
            )
            return RefundQuote(
                self.partial_refund_percent,
                amount,
                days,
                f"{self.partial_refund_percent}% refund - cancelled {days} days before check-in",
            )

        return RefundQuote(0, Decimal("0"), days, self.no_refund_message)
