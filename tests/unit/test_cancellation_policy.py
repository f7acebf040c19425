from datetime import date, timedelta
from decimal import Decimal

import pytest

from booking_engine.domain.cancellation_policy import CancellationPolicy

CHECK_IN = date(2025, 6, 20)
PAID = Decimal("172000")


@pytest.fixture
def policy():
    return CancellationPolicy()


class TestCancellationPolicy:
    def test_ten_days_before_gives_full_refund(self, policy):
        quote = policy.quote(PAID, CHECK_IN, CHECK_IN - timedelta(days=10))

        assert quote.percent == 100
        assert quote.amount == PAID

    def test_two_days_before_gives_partial_refund(self, policy):
        quote = policy.quote(PAID, CHECK_IN, CHECK_IN - timedelta(days=2))

        assert quote.percent == 50
        assert quote.amount == Decimal("86000.00")

    def test_check_in_day_gives_no_refund(self, policy):
        quote = policy.quote(PAID, CHECK_IN, CHECK_IN)

        assert quote.percent == 0
        assert quote.amount == Decimal("0")
        assert quote.message == policy.no_refund_message

    @pytest.mark.parametrize(
        "days_before,expected_percent",
        [(8, 100), (7, 100), (6, 50), (5, 50), (3, 50), (2, 50), (1, 0)],
    )
    def test_window_boundaries(self, policy, days_before, expected_percent):
        quote = policy.quote(PAID, CHECK_IN, CHECK_IN - timedelta(days=days_before))

        assert quote.percent == expected_percent

    def test_days_remaining_counts_check_in_day(self):
        assert CancellationPolicy.days_remaining(CHECK_IN, CHECK_IN) == 1
        assert CancellationPolicy.days_remaining(CHECK_IN, CHECK_IN - timedelta(days=2)) == 3

    def test_six_days_before_is_partial_even_with_seven_days_remaining(self, policy):
        """El umbral total cuenta días de calendario, no el conteo inclusivo."""
        quote = policy.quote(Decimal("100"), date(2025, 6, 7), date(2025, 6, 1))

        assert quote.percent == 50, "6 días antes no alcanza el reembolso total"
        assert quote.amount == Decimal("50.00")
        assert quote.days_remaining == 7

    def test_unpaid_reservation_refunds_nothing(self, policy):
        quote = policy.quote(Decimal("0"), CHECK_IN, CHECK_IN - timedelta(days=30))

        assert quote.amount == Decimal("0")
        assert quote.percent == 0

    def test_partial_refund_rounds_half_up_to_cents(self):
        policy = CancellationPolicy(partial_refund_percent=33)

        quote = policy.quote(Decimal("100.05"), CHECK_IN, CHECK_IN - timedelta(days=3))

        # 100.05 * 0.33 = 33.0165
        assert quote.amount == Decimal("33.02")

    def test_custom_windows(self):
        policy = CancellationPolicy(full_refund_days=14, partial_refund_days=7, partial_refund_percent=25)

        quote = policy.quote(PAID, CHECK_IN, CHECK_IN - timedelta(days=10))

        assert quote.percent == 25
        assert quote.amount == Decimal("43000.00")

    def test_rejects_inverted_windows(self):
        with pytest.raises(ValueError):
            CancellationPolicy(full_refund_days=3, partial_refund_days=7)
