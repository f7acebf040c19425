from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, condecimal, constr

from booking_engine.application.dtos.reservation_dto import (
    CancellationDTO,
    CreateReservationDTO,
    GuestDTO,
    ReservationDetailsDTO,
)
from booking_engine.domain.entities.reservation import PaymentOption
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown

Money = condecimal(max_digits=12, decimal_places=2, ge=0)
ReservationNumberStr = constr(strip_whitespace=True, min_length=1, max_length=32)


class Guest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: constr(strip_whitespace=True, min_length=2, max_length=100)
    email: EmailStr
    phone: constr(strip_whitespace=True, max_length=30) | None = None
    notes: constr(max_length=1000) | None = None


class SubmittedPricing(BaseModel):
    """Desglose que el cliente mostró al huésped; el servidor lo verifica."""

    model_config = ConfigDict(extra="forbid")

    base_amount: Money
    cleaning_fee: Money
    tax_amount: Money
    discount_amount: Money = Field(default=Decimal("0"))
    total_amount: Money


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    unit_id: int = Field(gt=0)
    check_in: date
    check_out: date
    guest_count: int = Field(ge=1, le=50)
    guest: Guest
    pricing: SubmittedPricing
    payment_option: PaymentOption = PaymentOption.RESERVE
    deposit_amount: Money | None = None

    def to_dto(self) -> CreateReservationDTO:
        return CreateReservationDTO(
            unit_id=self.unit_id,
            check_in=self.check_in,
            check_out=self.check_out,
            guest_count=self.guest_count,
            guest=GuestDTO(
                full_name=self.guest.full_name,
                email=str(self.guest.email),
                phone=self.guest.phone,
                notes=self.guest.notes,
            ),
            pricing=PriceBreakdown(
                base_amount=self.pricing.base_amount,
                cleaning_fee=self.pricing.cleaning_fee,
                tax_amount=self.pricing.tax_amount,
                discount_amount=self.pricing.discount_amount,
                total_amount=self.pricing.total_amount,
            ),
            payment_option=self.payment_option,
            deposit_amount=self.deposit_amount,
        )


class CreateReservationResponse(BaseModel):
    reservation_id: int
    reservation_number: str
    customer_id: int


class LookupReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reservation_number: ReservationNumberStr
    email: EmailStr


class GuestSummary(BaseModel):
    full_name: str
    email: str
    phone: str | None = None


class ReservationDetailResponse(BaseModel):
    reservation_number: str
    unit_id: int
    check_in: date
    check_out: date
    nights: int
    guest_count: int
    status: str
    payment_status: str
    approval_status: str
    payment_option: str
    base_amount: Decimal
    cleaning_fee: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    amount_paid: Decimal
    refund_amount: Decimal
    notes: str | None = None
    guest: GuestSummary
    created_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    @classmethod
    def from_details(cls, details: ReservationDetailsDTO) -> "ReservationDetailResponse":
        reservation = details.reservation
        customer = details.customer
        return cls(
            reservation_number=reservation.reservation_number,
            unit_id=reservation.unit_id,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            nights=reservation.stay.nights,
            guest_count=reservation.guest_count,
            status=reservation.status.value,
            payment_status=reservation.payment_status.value,
            approval_status=reservation.approval_status.value,
            payment_option=reservation.payment_option.value,
            base_amount=reservation.base_amount,
            cleaning_fee=reservation.cleaning_fee,
            tax_amount=reservation.tax_amount,
            discount_amount=reservation.discount_amount,
            total_amount=reservation.total_amount,
            amount_paid=reservation.amount_paid,
            refund_amount=reservation.refund_amount,
            notes=reservation.notes,
            guest=GuestSummary(
                full_name=customer.full_name,
                email=customer.email,
                phone=customer.phone,
            ),
            created_at=reservation.created_at,
            cancelled_at=reservation.cancelled_at,
            cancellation_reason=reservation.cancellation_reason,
        )


class CancelReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    reason: constr(strip_whitespace=True, max_length=500) | None = None


class CancelReservationResponse(BaseModel):
    reservation_number: str
    status: str
    payment_status: str
    refund_percent: int
    refund_amount: Decimal
    days_remaining: int
    message: str

    @classmethod
    def from_cancellation(cls, cancellation: CancellationDTO) -> "CancelReservationResponse":
        reservation = cancellation.reservation
        refund = cancellation.refund
        return cls(
            reservation_number=reservation.reservation_number,
            status=reservation.status.value,
            payment_status=reservation.payment_status.value,
            refund_percent=refund.percent,
            refund_amount=refund.amount,
            days_remaining=refund.days_remaining,
            message=refund.message,
        )
