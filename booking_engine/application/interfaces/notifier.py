"""Interface Notifier - colaborador de envío de emails tras cambios de estado."""

from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.entities.reservation import Reservation


class Notifier:
    """
    Puerto fire-and-forget. Su resultado no afecta la corrección del motor.
    """

    async def reservation_created(self, reservation: Reservation, customer: Customer) -> None:
        raise NotImplementedError

    async def reservation_cancelled(self, reservation: Reservation, customer: Customer) -> None:
        raise NotImplementedError
