"""Unidades de demostración compartidas por el modo in-memory y scripts/seed_db.py."""

from decimal import Decimal

from booking_engine.domain.entities.unit import Unit

DEMO_UNITS: tuple[Unit, ...] = (
    Unit(
        id=1,
        name="Garden Studio",
        base_price_per_night=Decimal("50000"),
        cleaning_fee=Decimal("10000"),
        max_occupancy=2,
    ),
    Unit(
        id=2,
        name="Two-Bedroom Apartment",
        base_price_per_night=Decimal("85000"),
        cleaning_fee=Decimal("15000"),
        max_occupancy=4,
    ),
    Unit(
        id=3,
        name="Penthouse Suite",
        base_price_per_night=Decimal("150000"),
        cleaning_fee=Decimal("25000"),
        max_occupancy=6,
    ),
    Unit(
        id=4,
        name="Retired Loft",
        base_price_per_night=Decimal("40000"),
        cleaning_fee=Decimal("8000"),
        max_occupancy=2,
        is_active=False,
    ),
)
