"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from booking_engine.application.dtos.reservation_dto import (
    CancellationDTO,
    CreateReservationDTO,
    GuestDTO,
    ReservationCreatedDTO,
    ReservationDetailsDTO,
)

__all__ = [
    "CancellationDTO",
    "CreateReservationDTO",
    "GuestDTO",
    "ReservationCreatedDTO",
    "ReservationDetailsDTO",
]
