import logging

from booking_engine.application.dtos.reservation_dto import ReservationDetailsDTO
from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.result import Err, Ok, Result, guard_store
from booking_engine.domain.errors import ReservationNotFoundError
from booking_engine.domain.value_objects.reservation_number import ReservationNumber


async def load_reservation_details(
    reservation_repo: ReservationRepo,
    customer_repo: CustomerRepo,
    reservation_number: str,
) -> ReservationDetailsDTO | None:
    reservation = await reservation_repo.get_by_number(reservation_number)
    if reservation is None:
        return None
    customer = await customer_repo.get_by_id(reservation.customer_id)
    if customer is None:
        return None
    return ReservationDetailsDTO(reservation=reservation, customer=customer)


async def find_guest_reservation(
    reservation_repo: ReservationRepo,
    customer_repo: CustomerRepo,
    transaction_manager: TransactionManager,
    reservation_number: str,
    email: str,
    timeout: float,
) -> Result[ReservationDetailsDTO]:
    """
    Carga la reservación solo si el email coincide con el de su cliente.

    Número inexistente y email incorrecto producen el mismo error, para no
    permitir enumerar números de reservación válidos.
    """
    try:
        number = ReservationNumber.from_string(reservation_number).value
    except ValueError:
        return Err(ReservationNotFoundError())

    loaded = await guard_store(
        transaction_manager.run(
            lambda: load_reservation_details(reservation_repo, customer_repo, number)
        ),
        timeout=timeout,
        operation="reservation_lookup",
    )
    if isinstance(loaded, Err):
        return loaded

    details = loaded.value
    if details is None or not details.customer.matches_email(email):
        return Err(ReservationNotFoundError())
    return Ok(details)


class LookupReservationUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        customer_repo: CustomerRepo,
        transaction_manager: TransactionManager,
        store_timeout_seconds: float = 5.0,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._customer_repo = customer_repo
        self._transaction_manager = transaction_manager
        self._timeout = store_timeout_seconds
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_number: str, email: str) -> Result[ReservationDetailsDTO]:
        found = await find_guest_reservation(
            self._reservation_repo,
            self._customer_repo,
            self._transaction_manager,
            reservation_number,
            email,
            self._timeout,
        )
        if isinstance(found, Err):
            self._logger.info("Reservation lookup failed", extra={"code": found.code})
        return found
