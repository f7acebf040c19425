import logging

from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.result import Err, Ok, Result, guard_store
from booking_engine.domain.entities.reservation import Reservation, ReservationStatus
from booking_engine.domain.errors import (
    InvalidReservationStatusError,
    OptimisticLockError,
    ReservationNotFoundError,
    ValidationError,
)
from booking_engine.domain.value_objects.reservation_number import ReservationNumber


class AdvanceStatusUseCase:
    """
    Operación de staff: aprobar, registrar check-in o completar una estancia.

    La cancelación tiene su propio caso de uso porque calcula el reembolso.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
        store_timeout_seconds: float = 5.0,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager
        self._timeout = store_timeout_seconds
        self._logger = logging.getLogger(__name__)

    async def execute(
        self, reservation_number: str, target_status: ReservationStatus | str
    ) -> Result[Reservation]:
        try:
            target = ReservationStatus(target_status)
        except ValueError:
            return Err(ValidationError("status", "Unknown reservation status"))
        if target == ReservationStatus.CANCELLED:
            return Err(
                ValidationError("status", "Use the cancellation operation to cancel a reservation")
            )

        try:
            number = ReservationNumber.from_string(reservation_number).value
        except ValueError:
            return Err(ReservationNotFoundError())

        return await guard_store(
            self._transaction_manager.run(lambda: self._advance(number, target)),
            timeout=self._timeout,
            operation="reservation_advance",
            expected=(
                ReservationNotFoundError,
                InvalidReservationStatusError,
                OptimisticLockError,
            ),
        )

    async def _advance(self, reservation_number: str, target: ReservationStatus) -> Reservation:
        reservation = await self._reservation_repo.get_by_number(reservation_number)
        if reservation is None:
            raise ReservationNotFoundError()
        if not reservation.can_transition_to(target):
            raise InvalidReservationStatusError(
                current_status=reservation.status.value,
                target_status=target.value,
                operation="advance reservation",
            )

        previous = reservation.status
        expected_lock_version = reservation.lock_version
        reservation.transition_to(target)
        await self._reservation_repo.update(reservation, expected_lock_version)

        self._logger.info(
            "Reservation status advanced",
            extra={
                "reservation_number": reservation_number,
                "from_status": previous.value,
                "to_status": target.value,
            },
        )
        return reservation
