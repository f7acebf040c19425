from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from booking_engine.api.schemas.reservations import (
    CancelReservationResponse,
    CreateReservationRequest,
    LookupReservationRequest,
    ReservationDetailResponse,
)
from booking_engine.application.dtos.reservation_dto import CancellationDTO, ReservationDetailsDTO
from booking_engine.domain.cancellation_policy import RefundQuote
from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.entities.reservation import (
    PaymentOption,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)


@pytest.fixture()
def base_request_payload(reservation_payload):
    return reservation_payload


@pytest.fixture()
def stored_reservation():
    return Reservation(
        id=7,
        reservation_number="RES-ABC12345",
        unit_id=1,
        customer_id=3,
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 4),
        guest_count=2,
        base_amount=Decimal("150000"),
        cleaning_fee=Decimal("10000"),
        tax_amount=Decimal("12000"),
        total_amount=Decimal("172000"),
        amount_paid=Decimal("172000"),
        status=ReservationStatus.CONFIRMED,
        payment_status=PaymentStatus.PAID,
        payment_option=PaymentOption.FULL,
        created_at=datetime(2025, 5, 1, 12, 0),
    )


def test_create_reservation_request_valid(base_request_payload):
    req = CreateReservationRequest(**base_request_payload)

    assert req.check_in == date(2025, 6, 1)
    assert req.payment_option == PaymentOption.FULL
    assert req.pricing.total_amount == Decimal("172000")


def test_create_reservation_request_defaults_to_reserve(base_request_payload):
    base_request_payload.pop("payment_option")

    req = CreateReservationRequest(**base_request_payload)

    assert req.payment_option == PaymentOption.RESERVE
    assert req.pricing.discount_amount == Decimal("0")


def test_create_reservation_request_strips_guest_name(base_request_payload):
    base_request_payload["guest"]["full_name"] = "  Ada Obi  "

    dto = CreateReservationRequest(**base_request_payload).to_dto()

    assert dto.guest.full_name == "Ada Obi"
    assert dto.pricing.total_amount == Decimal("172000")


@pytest.mark.parametrize(
    "field,value",
    [
        ("guest_count", 51),
        ("unit_id", 0),
        ("payment_option", "later"),
        ("deposit_amount", "-5"),
    ],
)
def test_create_reservation_request_rejects_bad_values(base_request_payload, field, value):
    bad_payload = base_request_payload | {field: value}

    with pytest.raises(ValidationError):
        CreateReservationRequest(**bad_payload)


def test_create_reservation_request_rejects_unknown_fields(base_request_payload):
    base_request_payload["pricing"]["currency"] = "USD"

    with pytest.raises(ValidationError):
        CreateReservationRequest(**base_request_payload)


def test_lookup_request_strips_number():
    req = LookupReservationRequest(reservation_number="  RES-ABC12345 ", email="ada@example.com")

    assert req.reservation_number == "RES-ABC12345"


def test_detail_response_serialization(stored_reservation):
    customer = Customer(id=3, full_name="Ada Obi", email="ada@example.com")

    response = ReservationDetailResponse.from_details(
        ReservationDetailsDTO(reservation=stored_reservation, customer=customer)
    )

    serialized = response.model_dump()
    assert serialized["nights"] == 3
    assert serialized["status"] == "confirmed"
    assert serialized["payment_option"] == "full"
    assert serialized["guest"] == {"full_name": "Ada Obi", "email": "ada@example.com", "phone": None}


def test_cancel_response_serialization(stored_reservation):
    stored_reservation.cancel(datetime(2025, 5, 29), "Plans changed", Decimal("86000.00"))
    refund = RefundQuote(50, Decimal("86000.00"), 4, "50% refund - cancelled 4 days before check-in")

    response = CancelReservationResponse.from_cancellation(
        CancellationDTO(reservation=stored_reservation, refund=refund)
    )

    serialized = response.model_dump()
    assert serialized["status"] == "cancelled"
    assert serialized["payment_status"] == "partially_refunded"
    assert serialized["refund_percent"] == 50
    assert serialized["days_remaining"] == 4
