"""Entidad Reservation - Agregado raíz del dominio."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.domain.value_objects.stay_range import StayRange


class ReservationStatus(str, Enum):
    """Estados del ciclo de vida de una reservación."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Estados de pago de una reservación."""

    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    PARTIALLY_REFUNDED = "partially_refunded"
    REFUNDED = "refunded"


class ApprovalStatus(str, Enum):
    """Aprobación manual requerida por las reservas sin pago."""

    PENDING = "pending"
    APPROVED = "approved"


class PaymentOption(str, Enum):
    """Ruta de pago elegida al crear la reservación."""

    FULL = "full"
    PARTIAL = "partial"
    RESERVE = "reserve"


# Estados que ocupan noches de la unidad.
ACTIVE_STATUSES = frozenset(
    {ReservationStatus.PENDING, ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN}
)

ALLOWED_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset(
        {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}
    ),
    ReservationStatus.CONFIRMED: frozenset(
        {ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED}
    ),
    ReservationStatus.CHECKED_IN: frozenset({ReservationStatus.COMPLETED}),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}


@dataclass
class Reservation:
    """
    Entidad principal del dominio - Agregado Raíz.

    Representa la ocupación de una unidad por un cliente durante una estancia,
    con el desglose de precio calculado por el servidor.
    """

    # Identificadores
    id: int | None = None
    reservation_number: str = ""

    # Referencias externas
    unit_id: int = 0
    customer_id: int = 0

    # Estancia
    check_in: date | None = None
    check_out: date | None = None
    guest_count: int = 1

    # Financieros
    base_amount: Decimal = Decimal("0")
    cleaning_fee: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")
    refund_amount: Decimal = Decimal("0")

    # Estados
    status: ReservationStatus = ReservationStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    payment_option: PaymentOption = PaymentOption.RESERVE

    notes: str | None = None

    # Timestamps
    created_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    # Control de concurrencia
    lock_version: int = 0

    # === Propiedades calculadas ===

    @property
    def stay(self) -> StayRange:
        """Retorna la estancia como Value Object."""
        return StayRange(check_in=self.check_in, check_out=self.check_out)

    @property
    def pricing(self) -> PriceBreakdown:
        return PriceBreakdown(
            base_amount=self.base_amount,
            cleaning_fee=self.cleaning_fee,
            tax_amount=self.tax_amount,
            discount_amount=self.discount_amount,
            total_amount=self.total_amount,
            nights=self.stay.nights,
        )

    @property
    def is_active(self) -> bool:
        """Verifica si la reservación ocupa noches de la unidad."""
        return self.status in ACTIVE_STATUSES

    # === Métodos de negocio ===

    def can_transition_to(self, target: ReservationStatus) -> bool:
        """Consulta la tabla de transiciones permitidas."""
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: ReservationStatus) -> None:
        """
        Aplica una transición ya validada con can_transition_to.

        Al confirmar una reserva pendiente se registra también la aprobación manual.
        """
        if not self.can_transition_to(target):
            raise ValueError(f"transition {self.status.value} -> {target.value} not allowed")
        if self.status == ReservationStatus.PENDING and target == ReservationStatus.CONFIRMED:
            self.approval_status = ApprovalStatus.APPROVED
        self.status = target

    def cancel(self, cancelled_at: datetime, reason: str, refund_amount: Decimal) -> None:
        """Cancela la reservación y ajusta el estado de pago según el reembolso."""
        self.transition_to(ReservationStatus.CANCELLED)
        self.cancelled_at = cancelled_at
        self.cancellation_reason = reason
        self.refund_amount = refund_amount
        if refund_amount > 0:
            self.payment_status = (
                PaymentStatus.REFUNDED
                if refund_amount >= self.amount_paid
                else PaymentStatus.PARTIALLY_REFUNDED
            )
