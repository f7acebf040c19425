"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj fijo (FakeClock) y Settings de prueba
- Repositorios in-memory frescos por test
- Casos de uso ya cableados y cliente HTTP (FastAPI TestClient)
- Base de datos SQLite temporal (aiosqlite) para los repositorios SQL
- Payloads de ejemplo con el precio correcto
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from booking_engine.api.dependencies import (
    build_in_memory_bundle,
    build_rate_limiter,
    build_use_cases,
    get_rate_limiter,
    get_use_cases,
)
from booking_engine.application.dtos.reservation_dto import CreateReservationDTO, GuestDTO
from booking_engine.application.interfaces.clock import FakeClock
from booking_engine.config import Settings
from booking_engine.domain.entities.reservation import PaymentOption
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.infrastructure.db.engine import build_sessionmaker
from booking_engine.infrastructure.db.tables import metadata, units
from booking_engine.infrastructure.seed import DEMO_UNITS
from booking_engine.main import app

# Garden Studio (unit 1): 50,000/noche + 10,000 limpieza, 3 noches
CHECK_IN = date(2025, 6, 1)
CHECK_OUT = date(2025, 6, 4)
EXPECTED_PRICING = {
    "base_amount": "150000",
    "cleaning_fee": "10000",
    "tax_amount": "12000",
    "discount_amount": "0",
    "total_amount": "172000",
}


# ============================================================================
# RELOJ Y CONFIGURACIÓN
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Reloj fijo un mes antes de la estancia de ejemplo."""
    return FakeClock(datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        use_in_memory=True,
        environment="test",
        allowed_origins="https://booking.example.com",
        store_timeout_seconds=1.0,
    )


# ============================================================================
# REPOSITORIOS Y CASOS DE USO
# ============================================================================


@pytest.fixture
def bundle():
    """Repositorios in-memory frescos (aislamiento entre tests)."""
    return build_in_memory_bundle()


@pytest.fixture
def use_cases(settings, fake_clock, bundle):
    return build_use_cases(settings, fake_clock, **bundle)


@pytest.fixture
def rate_limiter(settings, fake_clock):
    return build_rate_limiter(settings, fake_clock)


# ============================================================================
# CLIENTE HTTP
# ============================================================================


@pytest.fixture
def client(use_cases, rate_limiter) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient con los casos de uso y el rate limiter del test.
    """
    app.dependency_overrides[get_use_cases] = lambda: use_cases
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# BASE DE DATOS SQL
# ============================================================================


@pytest_asyncio.fixture
async def sql_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    SQLite en archivo temporal: varias sesiones ven los mismos datos,
    a diferencia de sqlite:///:memory:.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'booking.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(
            insert(units),
            [
                {
                    "id": unit.id,
                    "name": unit.name,
                    "base_price_per_night": unit.base_price_per_night,
                    "cleaning_fee": unit.cleaning_fee,
                    "max_occupancy": unit.max_occupancy,
                    "is_active": unit.is_active,
                }
                for unit in DEMO_UNITS
            ],
        )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_session(sql_engine) -> AsyncGenerator[AsyncSession, None]:
    async with build_sessionmaker(sql_engine)() as session:
        yield session


# ============================================================================
# DATOS DE PRUEBA
# ============================================================================


@pytest.fixture
def reservation_payload() -> dict:
    """Payload HTTP válido para la estancia de ejemplo."""
    return {
        "unit_id": 1,
        "check_in": CHECK_IN.isoformat(),
        "check_out": CHECK_OUT.isoformat(),
        "guest_count": 2,
        "guest": {
            "full_name": "Ada Obi",
            "email": "ada@example.com",
            "phone": "+2348000000000",
        },
        "pricing": dict(EXPECTED_PRICING),
        "payment_option": "full",
    }


def make_command(
    email: str = "ada@example.com",
    check_in: date | str = CHECK_IN,
    check_out: date | str = CHECK_OUT,
    payment_option: PaymentOption | str = PaymentOption.FULL,
    pricing: dict | None = None,
    unit_id: int = 1,
    guest_count: int = 2,
    deposit_amount: Decimal | None = None,
    full_name: str = "Ada Obi",
) -> CreateReservationDTO:
    amounts = {key: Decimal(value) for key, value in (pricing or EXPECTED_PRICING).items()}
    return CreateReservationDTO(
        unit_id=unit_id,
        check_in=check_in,
        check_out=check_out,
        guest_count=guest_count,
        guest=GuestDTO(full_name=full_name, email=email, phone="+2348000000000"),
        pricing=PriceBreakdown(**amounts),
        payment_option=payment_option,
        deposit_amount=deposit_amount,
    )


@pytest.fixture
def command_factory():
    return make_command
