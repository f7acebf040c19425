"""Casos de uso del motor de reservaciones."""

from booking_engine.application.use_cases.advance_status import AdvanceStatusUseCase
from booking_engine.application.use_cases.cancel_reservation import CancelReservationUseCase
from booking_engine.application.use_cases.create_reservation import CreateReservationUseCase
from booking_engine.application.use_cases.lookup_reservation import LookupReservationUseCase

__all__ = [
    "AdvanceStatusUseCase",
    "CancelReservationUseCase",
    "CreateReservationUseCase",
    "LookupReservationUseCase",
]
