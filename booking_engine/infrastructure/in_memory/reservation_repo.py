"""Implementación in-memory del libro de reservaciones."""

import threading
from copy import deepcopy
from datetime import date

from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.domain.entities.reservation import Reservation
from booking_engine.domain.errors import (
    OptimisticLockError,
    ReservationNumberConflictError,
    UnitNotAvailableError,
)
from booking_engine.domain.value_objects.stay_range import StayRange


class InMemoryReservationRepo(ReservationRepo):
    """
    Implementación in-memory para testing y modo demo.

    `_nights` indexa (unit_id, noche) -> reservation_id, el equivalente a la
    restricción UNIQUE de reservation_nights. Verificación e inserción ocurren
    bajo el mismo lock, sin awaits en medio.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_number: dict[str, Reservation] = {}
        self._nights: dict[tuple[int, date], int] = {}
        self._next_id = 1

    async def has_active_overlap(self, unit_id: int, check_in: date, check_out: date) -> bool:
        requested = StayRange(check_in=check_in, check_out=check_out)
        with self._lock:
            return any(
                reservation.unit_id == unit_id
                and reservation.is_active
                and reservation.stay.overlaps_with(requested)
                for reservation in self._by_number.values()
            )

    async def insert(self, reservation: Reservation) -> Reservation:
        nights = list(reservation.stay.iter_nights())
        with self._lock:
            if reservation.reservation_number in self._by_number:
                raise ReservationNumberConflictError(reservation.reservation_number)
            if any((reservation.unit_id, night) in self._nights for night in nights):
                raise UnitNotAvailableError(reservation.unit_id)

            reservation.id = self._next_id
            self._next_id += 1
            self._by_number[reservation.reservation_number] = deepcopy(reservation)
            for night in nights:
                self._nights[(reservation.unit_id, night)] = reservation.id
        return reservation

    async def get_by_number(self, reservation_number: str) -> Reservation | None:
        with self._lock:
            stored = self._by_number.get(reservation_number)
            return deepcopy(stored) if stored else None

    async def update(self, reservation: Reservation, expected_lock_version: int) -> None:
        with self._lock:
            stored = self._by_number.get(reservation.reservation_number)
            if stored is None or stored.lock_version != expected_lock_version:
                raise OptimisticLockError(reservation.reservation_number, expected_lock_version)

            updated = deepcopy(reservation)
            updated.lock_version = expected_lock_version + 1
            self._by_number[reservation.reservation_number] = updated
            if not updated.is_active:
                for key in [key for key, owner in self._nights.items() if owner == updated.id]:
                    del self._nights[key]
        reservation.lock_version = expected_lock_version + 1

    def list_by_unit(self, unit_id: int) -> list[Reservation]:
        with self._lock:
            return [deepcopy(r) for r in self._by_number.values() if r.unit_id == unit_id]

    def occupied_nights(self, unit_id: int) -> list[date]:
        with self._lock:
            return sorted(night for (owner_unit, night) in self._nights if owner_unit == unit_id)
