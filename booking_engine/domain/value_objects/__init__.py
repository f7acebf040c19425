"""Value Objects del dominio de reservaciones."""

from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.domain.value_objects.reservation_number import ReservationNumber
from booking_engine.domain.value_objects.stay_range import StayRange

__all__ = [
    "PriceBreakdown",
    "ReservationNumber",
    "StayRange",
]
