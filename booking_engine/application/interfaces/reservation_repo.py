"""Interface ReservationRepo - Puerto para el libro de reservaciones."""

from datetime import date

from booking_engine.domain.entities.reservation import Reservation


class ReservationRepo:
    """
    Puerto para el repositorio de reservaciones.

    Las implementaciones deben hacer cumplir en el propio almacén que dos
    reservaciones activas de una unidad no se traslapen.
    """

    async def has_active_overlap(self, unit_id: int, check_in: date, check_out: date) -> bool:
        """
        Verifica si existe una reservación activa que se traslape con [check_in, check_out).

        Usa la prueba existing.check_in < check_out AND existing.check_out > check_in.
        """
        raise NotImplementedError

    async def insert(self, reservation: Reservation) -> Reservation:
        """
        Persiste la reservación junto con sus noches ocupadas.

        Raises:
            UnitNotAvailableError: Si el almacén detecta un traslape.
            ReservationNumberConflictError: Si el número ya fue emitido.
        """
        raise NotImplementedError

    async def get_by_number(self, reservation_number: str) -> Reservation | None:
        raise NotImplementedError

    async def update(self, reservation: Reservation, expected_lock_version: int) -> None:
        """
        Guarda cambios de estado con control optimista.

        Si la reservación deja de estar activa, libera sus noches.

        Raises:
            OptimisticLockError: Si la versión no coincide.
        """
        raise NotImplementedError
