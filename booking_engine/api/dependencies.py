from functools import lru_cache
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.deps import get_sessionmaker
from booking_engine.application.interfaces.audit_log_repo import AuditLogRepo
from booking_engine.application.interfaces.clock import Clock, SystemClock
from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.application.interfaces.notifier import Notifier
from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.interfaces.unit_repo import UnitRepo
from booking_engine.application.services.audit import AuditLogWriter
from booking_engine.application.services.availability import AvailabilityOracle
from booking_engine.application.services.customers import CustomerResolver
from booking_engine.application.services.integrity import IntegrityGuard
from booking_engine.application.services.pricing import PricingCalculator
from booking_engine.application.services.rate_limiter import RateLimiter, RateLimitRule
from booking_engine.application.use_cases.advance_status import AdvanceStatusUseCase
from booking_engine.application.use_cases.cancel_reservation import CancelReservationUseCase
from booking_engine.application.use_cases.create_reservation import CreateReservationUseCase
from booking_engine.application.use_cases.lookup_reservation import LookupReservationUseCase
from booking_engine.config import Settings, get_settings
from booking_engine.domain.cancellation_policy import CancellationPolicy
from booking_engine.infrastructure.db.repositories.audit_log_repo_sql import AuditLogRepoSQL
from booking_engine.infrastructure.db.repositories.customer_repo_sql import CustomerRepoSQL
from booking_engine.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from booking_engine.infrastructure.db.repositories.unit_repo_sql import UnitRepoSQL
from booking_engine.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from booking_engine.infrastructure.in_memory.audit_log_repo import InMemoryAuditLogRepo
from booking_engine.infrastructure.in_memory.customer_repo import InMemoryCustomerRepo
from booking_engine.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from booking_engine.infrastructure.in_memory.transaction_manager import NoopTransactionManager
from booking_engine.infrastructure.in_memory.unit_repo import InMemoryUnitRepo
from booking_engine.infrastructure.notifications.logging_notifier import LoggingNotifier
from booking_engine.infrastructure.seed import DEMO_UNITS

CREATE_RESERVATION = "create_reservation"
LOOKUP_RESERVATION = "lookup_reservation"
CANCEL_RESERVATION = "cancel_reservation"


@lru_cache(maxsize=1)
def get_clock() -> Clock:
    return SystemClock()


def build_rate_limiter(settings: Settings, clock: Clock) -> RateLimiter:
    rules = {
        CREATE_RESERVATION: RateLimitRule(
            settings.rate_limit_create_max, settings.rate_limit_create_window_seconds
        ),
        LOOKUP_RESERVATION: RateLimitRule(
            settings.rate_limit_lookup_max, settings.rate_limit_lookup_window_seconds
        ),
        CANCEL_RESERVATION: RateLimitRule(
            settings.rate_limit_cancel_max, settings.rate_limit_cancel_window_seconds
        ),
    }
    return RateLimiter(
        rules=rules,
        clock=clock,
        sweep_interval_seconds=settings.rate_limit_sweep_seconds,
    )


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    return build_rate_limiter(get_settings(), get_clock())


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with get_sessionmaker()() as session:
        yield session


def build_in_memory_bundle(units=DEMO_UNITS) -> dict[str, Any]:
    return {
        "unit_repo": InMemoryUnitRepo(units),
        "customer_repo": InMemoryCustomerRepo(),
        "reservation_repo": InMemoryReservationRepo(),
        "audit_log_repo": InMemoryAuditLogRepo(),
        "tx_manager": NoopTransactionManager(),
        "notifier": LoggingNotifier(),
    }


@lru_cache(maxsize=1)
def _in_memory_bundle() -> dict[str, Any]:
    return build_in_memory_bundle()


def build_use_cases(
    settings: Settings,
    clock: Clock,
    *,
    unit_repo: UnitRepo,
    customer_repo: CustomerRepo,
    reservation_repo: ReservationRepo,
    audit_log_repo: AuditLogRepo,
    tx_manager: TransactionManager,
    notifier: Notifier,
) -> dict[str, Any]:
    timeout = settings.store_timeout_seconds
    audit_writer = AuditLogWriter(
        audit_log_repo=audit_log_repo,
        transaction_manager=tx_manager,
        clock=clock,
        store_timeout_seconds=timeout,
    )
    policy = CancellationPolicy(
        full_refund_days=settings.cancellation_full_refund_days,
        partial_refund_days=settings.cancellation_partial_refund_days,
        partial_refund_percent=settings.cancellation_partial_refund_percent,
        no_refund_message=settings.cancellation_no_refund_message,
    )
    return {
        "create_reservation": CreateReservationUseCase(
            unit_repo=unit_repo,
            reservation_repo=reservation_repo,
            customer_resolver=CustomerResolver(
                customer_repo=customer_repo,
                transaction_manager=tx_manager,
                contact_policy=settings.customer_contact_policy,
                store_timeout_seconds=timeout,
            ),
            availability_oracle=AvailabilityOracle(
                reservation_repo=reservation_repo,
                transaction_manager=tx_manager,
                store_timeout_seconds=timeout,
            ),
            pricing_calculator=PricingCalculator(tax_rate=settings.tax_rate),
            integrity_guard=IntegrityGuard(
                audit_writer=audit_writer, tolerance=settings.price_tolerance
            ),
            audit_writer=audit_writer,
            notifier=notifier,
            transaction_manager=tx_manager,
            clock=clock,
            default_deposit_percent=settings.default_deposit_percent,
            store_timeout_seconds=timeout,
        ),
        "lookup_reservation": LookupReservationUseCase(
            reservation_repo=reservation_repo,
            customer_repo=customer_repo,
            transaction_manager=tx_manager,
            store_timeout_seconds=timeout,
        ),
        "cancel_reservation": CancelReservationUseCase(
            reservation_repo=reservation_repo,
            customer_repo=customer_repo,
            audit_writer=audit_writer,
            notifier=notifier,
            transaction_manager=tx_manager,
            clock=clock,
            policy=policy,
            store_timeout_seconds=timeout,
        ),
        "advance_status": AdvanceStatusUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
            store_timeout_seconds=timeout,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    if settings.use_in_memory:
        return build_use_cases(settings, clock, **_in_memory_bundle())

    if not session:
        raise RuntimeError("DB session not available")

    return build_use_cases(
        settings,
        clock,
        unit_repo=UnitRepoSQL(session),
        customer_repo=CustomerRepoSQL(session),
        reservation_repo=ReservationRepoSQL(session),
        audit_log_repo=AuditLogRepoSQL(session),
        tx_manager=SQLAlchemyTransactionManager(session),
        notifier=LoggingNotifier(),
    )
