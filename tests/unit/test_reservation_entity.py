from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from booking_engine.domain.entities.reservation import (
    ApprovalStatus,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)
from booking_engine.domain.errors import InvalidDateRangeError
from booking_engine.domain.value_objects.reservation_number import ReservationNumber
from booking_engine.domain.value_objects.stay_range import StayRange

NOW = datetime(2025, 5, 1, tzinfo=timezone.utc)


def make_reservation(status=ReservationStatus.PENDING, amount_paid="0") -> Reservation:
    return Reservation(
        reservation_number="RES-TEST0001",
        unit_id=1,
        customer_id=1,
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 4),
        total_amount=Decimal("172000"),
        amount_paid=Decimal(amount_paid),
        status=status,
    )


class TestTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (ReservationStatus.PENDING, ReservationStatus.CONFIRMED),
            (ReservationStatus.PENDING, ReservationStatus.CANCELLED),
            (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN),
            (ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED),
            (ReservationStatus.CHECKED_IN, ReservationStatus.COMPLETED),
        ],
    )
    def test_allowed(self, current, target):
        assert make_reservation(current).can_transition_to(target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (ReservationStatus.PENDING, ReservationStatus.CHECKED_IN),
            (ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED),
            (ReservationStatus.COMPLETED, ReservationStatus.CANCELLED),
            (ReservationStatus.CANCELLED, ReservationStatus.CONFIRMED),
            (ReservationStatus.CANCELLED, ReservationStatus.CANCELLED),
        ],
    )
    def test_rejected(self, current, target):
        reservation = make_reservation(current)

        assert not reservation.can_transition_to(target)
        with pytest.raises(ValueError):
            reservation.transition_to(target)

    def test_confirming_pending_reservation_approves_it(self):
        reservation = make_reservation()

        reservation.transition_to(ReservationStatus.CONFIRMED)

        assert reservation.approval_status == ApprovalStatus.APPROVED

    def test_terminal_statuses_release_nights(self):
        assert make_reservation(ReservationStatus.CHECKED_IN).is_active
        assert not make_reservation(ReservationStatus.COMPLETED).is_active
        assert not make_reservation(ReservationStatus.CANCELLED).is_active


class TestCancel:
    def test_full_refund_marks_refunded(self):
        reservation = make_reservation(ReservationStatus.CONFIRMED, amount_paid="172000")

        reservation.cancel(NOW, "Plans changed", Decimal("172000"))

        assert reservation.status == ReservationStatus.CANCELLED
        assert reservation.payment_status == PaymentStatus.REFUNDED
        assert reservation.cancelled_at == NOW
        assert reservation.cancellation_reason == "Plans changed"

    def test_partial_refund_marks_partially_refunded(self):
        reservation = make_reservation(ReservationStatus.CONFIRMED, amount_paid="172000")

        reservation.cancel(NOW, "Plans changed", Decimal("86000"))

        assert reservation.payment_status == PaymentStatus.PARTIALLY_REFUNDED

    def test_no_refund_keeps_payment_status(self):
        reservation = make_reservation(ReservationStatus.CONFIRMED, amount_paid="172000")
        reservation.payment_status = PaymentStatus.PAID

        reservation.cancel(NOW, "Plans changed", Decimal("0"))

        assert reservation.payment_status == PaymentStatus.PAID


class TestValueObjects:
    def test_stay_range_rejects_checkout_before_checkin(self):
        with pytest.raises(InvalidDateRangeError):
            StayRange(date(2025, 6, 4), date(2025, 6, 1))

    def test_stay_range_nights_exclude_checkout_day(self):
        stay = StayRange(date(2025, 6, 1), date(2025, 6, 4))

        assert list(stay.iter_nights()) == [date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)]

    def test_generated_reservation_number_format(self):
        number = ReservationNumber.generate().value

        assert number.startswith("RES-")
        assert len(number) == 12
        assert number[4:].isalnum() and number[4:].upper() == number[4:]

    def test_reservation_number_normalized_from_input(self):
        assert ReservationNumber.from_string(" res-ab12cd34 ").value == "RES-AB12CD34"
