import asyncio
from datetime import date
from decimal import Decimal

import pytest

from booking_engine.application.result import Err, Ok
from booking_engine.application.services.availability import AvailabilityOracle
from booking_engine.domain.entities.reservation import Reservation, ReservationStatus
from booking_engine.domain.errors import InvalidDateRangeError
from booking_engine.domain.value_objects.stay_range import StayRange
from booking_engine.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from booking_engine.infrastructure.in_memory.transaction_manager import NoopTransactionManager


def reservation(number: str, check_in: date, check_out: date, unit_id: int = 1) -> Reservation:
    return Reservation(
        reservation_number=number,
        unit_id=unit_id,
        customer_id=1,
        check_in=check_in,
        check_out=check_out,
        total_amount=Decimal("100"),
        status=ReservationStatus.CONFIRMED,
    )


@pytest.fixture
def repo():
    return InMemoryReservationRepo()


@pytest.fixture
def oracle(repo):
    return AvailabilityOracle(repo, NoopTransactionManager(), store_timeout_seconds=1.0)


class SlowRepo(InMemoryReservationRepo):
    async def has_active_overlap(self, unit_id, check_in, check_out):
        await asyncio.sleep(0.5)
        return await super().has_active_overlap(unit_id, check_in, check_out)


class TestAvailabilityOracle:
    @pytest.mark.asyncio
    async def test_free_unit_is_available(self, oracle):
        assert await oracle.is_available(1, date(2025, 6, 1), date(2025, 6, 4))

    @pytest.mark.asyncio
    async def test_overlap_makes_unit_unavailable(self, oracle, repo):
        await repo.insert(reservation("RES-AAAA0001", date(2025, 6, 1), date(2025, 6, 4)))

        assert not await oracle.is_available(1, date(2025, 6, 3), date(2025, 6, 6))
        assert not await oracle.is_available(1, date(2025, 5, 30), date(2025, 6, 2))

    @pytest.mark.asyncio
    async def test_checkout_day_is_free_for_next_checkin(self, oracle, repo):
        """Rango semiabierto: rotación el mismo día."""
        await repo.insert(reservation("RES-AAAA0001", date(2025, 6, 1), date(2025, 6, 4)))

        assert await oracle.is_available(1, date(2025, 6, 4), date(2025, 6, 6))
        assert await oracle.is_available(1, date(2025, 5, 28), date(2025, 6, 1))

    @pytest.mark.asyncio
    async def test_other_units_do_not_block(self, oracle, repo):
        await repo.insert(reservation("RES-AAAA0001", date(2025, 6, 1), date(2025, 6, 4), unit_id=2))

        assert await oracle.is_available(1, date(2025, 6, 1), date(2025, 6, 4))

    @pytest.mark.asyncio
    async def test_cancelled_reservation_frees_dates(self, oracle, repo):
        booked = await repo.insert(
            reservation("RES-AAAA0001", date(2025, 6, 1), date(2025, 6, 4))
        )
        booked.status = ReservationStatus.CANCELLED
        await repo.update(booked, expected_lock_version=0)

        assert await oracle.is_available(1, date(2025, 6, 1), date(2025, 6, 4))

    @pytest.mark.asyncio
    async def test_invalid_range_raises(self, oracle):
        with pytest.raises(InvalidDateRangeError):
            await oracle.is_available(1, date(2025, 6, 4), date(2025, 6, 4))

    @pytest.mark.asyncio
    async def test_ensure_available_returns_conflict(self, oracle, repo):
        await repo.insert(reservation("RES-AAAA0001", date(2025, 6, 1), date(2025, 6, 4)))

        result = await oracle.ensure_available(1, StayRange(date(2025, 6, 2), date(2025, 6, 3)))

        assert isinstance(result, Err)
        assert result.code == "UNIT_NOT_AVAILABLE"
        assert result.error.message == "Unit is not available for the selected dates"

    @pytest.mark.asyncio
    async def test_ensure_available_ok(self, oracle):
        stay = StayRange(date(2025, 6, 2), date(2025, 6, 3))

        result = await oracle.ensure_available(1, stay)

        assert isinstance(result, Ok)
        assert result.value == stay

    @pytest.mark.asyncio
    async def test_store_timeout_fails_closed(self):
        oracle = AvailabilityOracle(SlowRepo(), NoopTransactionManager(), store_timeout_seconds=0.05)

        result = await oracle.ensure_available(1, StayRange(date(2025, 6, 1), date(2025, 6, 2)))

        assert isinstance(result, Err)
        assert result.code == "STORE_UNAVAILABLE"
