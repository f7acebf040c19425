"""DTOs para reservaciones."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from booking_engine.domain.cancellation_policy import RefundQuote
from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.entities.reservation import PaymentOption, Reservation
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown


@dataclass(frozen=True)
class GuestDTO:
    """Datos de contacto del huésped tal como llegan del cliente."""

    full_name: str
    email: str
    phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class CreateReservationDTO:
    """
    Comando de creación de reservación.

    Las fechas pueden llegar como `date` (desde la API) o como texto ISO
    `yyyy-mm-dd` (otros llamadores); el ledger las valida de nuevo.
    `pricing` es el desglose que el cliente mostró al huésped.
    """

    unit_id: int
    check_in: date | str
    check_out: date | str
    guest_count: int
    guest: GuestDTO
    pricing: PriceBreakdown
    payment_option: PaymentOption | str = PaymentOption.RESERVE
    deposit_amount: Decimal | None = None


@dataclass(frozen=True)
class ReservationCreatedDTO:
    reservation_id: int
    reservation_number: str
    customer_id: int


@dataclass(frozen=True)
class ReservationDetailsDTO:
    """Reservación junto con su cliente, solo tras verificar el email."""

    reservation: Reservation
    customer: Customer


@dataclass(frozen=True)
class CancellationDTO:
    reservation: Reservation
    refund: RefundQuote
