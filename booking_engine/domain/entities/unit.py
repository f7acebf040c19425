"""Entidad Unit - unidad rentable del catálogo (solo lectura para este motor)."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Unit:
    id: int
    name: str
    base_price_per_night: Decimal
    cleaning_fee: Decimal
    max_occupancy: int
    is_active: bool = True
