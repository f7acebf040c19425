"""Availability Oracle: decide si una unidad está libre para un rango."""

from datetime import date

from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.result import Err, Ok, Result, guard_store
from booking_engine.domain.errors import InvalidDateRangeError, UnitNotAvailableError
from booking_engine.domain.value_objects.stay_range import StayRange


class AvailabilityOracle:
    """
    Consulta de disponibilidad previa al commit.

    Es una verificación optimista: la exclusión definitiva la hace el almacén
    al insertar (ver ReservationRepo.insert).
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

    async def is_available(self, unit_id: int, check_in: date, check_out: date) -> bool:
        """
        Raises:
            InvalidDateRangeError: Si check_out <= check_in.
        """
        stay = StayRange(check_in=check_in, check_out=check_out)
        overlapping = await self._transaction_manager.run(
            lambda: self._reservation_repo.has_active_overlap(
                unit_id, stay.check_in, stay.check_out
            )
        )
        return not overlapping

    async def ensure_available(self, unit_id: int, stay: StayRange) -> Result[StayRange]:
        checked = await guard_store(
            self.is_available(unit_id, stay.check_in, stay.check_out),
            timeout=self._timeout,
            operation="availability_check",
            expected=(InvalidDateRangeError,),
        )
        if isinstance(checked, Err):
            return checked
        if not checked.value:
            return Err(UnitNotAvailableError(unit_id))
        return Ok(stay)
