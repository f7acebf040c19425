import threading
from datetime import datetime, timezone

import pytest

from booking_engine.application.interfaces.clock import FakeClock
from booking_engine.application.services.rate_limiter import RateLimiter, RateLimitRule

CREATE = "/api/v1/reservations"


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def limiter(clock):
    return RateLimiter(
        rules={CREATE: RateLimitRule(max_requests=5, window_seconds=60)},
        clock=clock,
        sweep_interval_seconds=60,
    )


class TestRateLimiter:
    def test_sixth_request_in_window_is_blocked(self, limiter):
        decisions = [limiter.check("203.0.113.10", CREATE) for _ in range(6)]

        assert all(d.allowed for d in decisions[:5])
        assert not decisions[5].allowed
        assert decisions[5].retry_after_seconds == 60

    def test_remaining_counts_down(self, limiter):
        remaining = [limiter.check("203.0.113.10", CREATE).remaining for _ in range(5)]

        assert remaining == [4, 3, 2, 1, 0]

    def test_retry_after_rounds_up_remaining_time(self, limiter, clock):
        for _ in range(5):
            limiter.check("203.0.113.10", CREATE)
        clock.advance(seconds=20.5)

        decision = limiter.check("203.0.113.10", CREATE)

        assert not decision.allowed
        assert decision.retry_after_seconds == 40

    def test_window_resets_after_expiry(self, limiter, clock):
        for _ in range(6):
            limiter.check("203.0.113.10", CREATE)
        clock.advance(seconds=61)

        decision = limiter.check("203.0.113.10", CREATE)

        assert decision.allowed
        assert decision.remaining == 4

    def test_clients_are_counted_separately(self, limiter):
        for _ in range(5):
            limiter.check("203.0.113.10", CREATE)

        assert limiter.check("198.51.100.7", CREATE).allowed
        assert not limiter.check("203.0.113.10", CREATE).allowed

    def test_endpoints_are_counted_separately(self, limiter):
        for _ in range(5):
            limiter.check("203.0.113.10", CREATE)

        assert limiter.check("203.0.113.10", "/api/v1/reservations/lookup").allowed

    def test_named_rule_applies_to_endpoint(self, clock):
        limiter = RateLimiter(
            rules={"lookup": RateLimitRule(max_requests=2, window_seconds=30)},
            clock=clock,
        )

        results = [limiter.check("1.1.1.1", "/lookup", "lookup").allowed for _ in range(3)]

        assert results == [True, True, False]

    def test_unknown_endpoint_uses_default_rule(self, clock):
        limiter = RateLimiter(
            rules={},
            clock=clock,
            default_rule=RateLimitRule(max_requests=1, window_seconds=10),
        )

        assert limiter.check("1.1.1.1", "/other").allowed
        assert not limiter.check("1.1.1.1", "/other").allowed

    def test_sweep_removes_only_expired_windows(self, limiter, clock):
        limiter.check("203.0.113.10", CREATE)
        clock.advance(seconds=30)
        limiter.check("198.51.100.7", CREATE)
        clock.advance(seconds=31)

        removed = limiter.sweep()

        assert removed == 1
        assert len(limiter) == 1

    def test_check_sweeps_automatically_each_interval(self, limiter, clock):
        for address in ("10.0.0.1", "10.0.0.2", "10.0.0.3"):
            limiter.check(address, CREATE)
        clock.advance(seconds=61)

        limiter.check("10.0.0.4", CREATE)

        assert len(limiter) == 1

    def test_rule_requires_positive_values(self):
        with pytest.raises(ValueError):
            RateLimitRule(max_requests=0, window_seconds=60)

    def test_concurrent_checks_never_exceed_limit(self, limiter):
        """El mapa compartido está protegido por lock: solo 5 de 50 pasan."""
        allowed = []
        barrier = threading.Barrier(10)

        def worker():
            barrier.wait()
            for _ in range(5):
                allowed.append(limiter.check("203.0.113.10", CREATE).allowed)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert allowed.count(True) == 5
