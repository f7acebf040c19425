from decimal import Decimal

import pytest

from booking_engine.application.result import Err, Ok
from booking_engine.application.services.audit import AuditLogWriter
from booking_engine.application.services.integrity import IntegrityGuard
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.infrastructure.in_memory.audit_log_repo import InMemoryAuditLogRepo
from booking_engine.infrastructure.in_memory.transaction_manager import NoopTransactionManager

EXPECTED = PriceBreakdown(
    base_amount=Decimal("150000"),
    cleaning_fee=Decimal("10000"),
    tax_amount=Decimal("12000"),
    discount_amount=Decimal("0"),
    total_amount=Decimal("172000"),
    nights=3,
)


def submitted(**overrides) -> PriceBreakdown:
    values = {
        "base_amount": EXPECTED.base_amount,
        "cleaning_fee": EXPECTED.cleaning_fee,
        "tax_amount": EXPECTED.tax_amount,
        "discount_amount": EXPECTED.discount_amount,
        "total_amount": EXPECTED.total_amount,
    }
    values.update({key: Decimal(value) for key, value in overrides.items()})
    return PriceBreakdown(**values)


@pytest.fixture
def audit_repo():
    return InMemoryAuditLogRepo()


@pytest.fixture
def guard(audit_repo, fake_clock):
    writer = AuditLogWriter(audit_repo, NoopTransactionManager(), fake_clock)
    return IntegrityGuard(writer)


class TestIntegrityGuard:
    @pytest.mark.asyncio
    async def test_exact_match_passes_without_audit(self, guard, audit_repo):
        result = await guard.verify(submitted(), EXPECTED, unit_id=1)

        assert isinstance(result, Ok)
        assert result.value == EXPECTED
        assert audit_repo.entries == []

    @pytest.mark.asyncio
    async def test_difference_within_tolerance_passes(self, guard, audit_repo):
        result = await guard.verify(submitted(total_amount="172001"), EXPECTED, unit_id=1)

        assert isinstance(result, Ok)
        assert audit_repo.entries == []

    @pytest.mark.asyncio
    async def test_mismatch_is_rejected_with_generic_message(self, guard):
        result = await guard.verify(submitted(total_amount="100"), EXPECTED, unit_id=1)

        assert isinstance(result, Err)
        assert result.code == "PRICING_MISMATCH"
        assert result.error.message == "Pricing verification failed. Please refresh and try again."
        assert "172000" not in result.error.message

    @pytest.mark.asyncio
    async def test_mismatch_writes_exactly_one_audit_entry(self, guard, audit_repo):
        await guard.verify(submitted(base_amount="1", tax_amount="1"), EXPECTED, unit_id=7)

        entries = audit_repo.entries
        assert len(entries) == 1, "Debe existir exactamente una entrada de auditoría"
        assert entries[0].action == "booking.price_manipulation_attempt"
        assert entries[0].details == "Price mismatch detected for unit 7"

    def test_reports_each_mismatched_field(self, guard):
        fields = guard.mismatched_fields(submitted(cleaning_fee="0", total_amount="162000"), EXPECTED)

        assert fields == ["cleaning_fee", "total_amount"]

    def test_discount_is_not_compared(self, guard):
        assert guard.mismatched_fields(submitted(discount_amount="500"), EXPECTED) == []
