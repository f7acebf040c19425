import logging

from booking_engine.application.interfaces.notifier import Notifier
from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.entities.reservation import Reservation

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Stand-in for the email service: records which message would be sent."""

    async def reservation_created(self, reservation: Reservation, customer: Customer) -> None:
        logger.info(
            "Booking confirmation email queued",
            extra={
                "reservation_number": reservation.reservation_number,
                "customer_id": customer.id,
                "status": reservation.status.value,
            },
        )

    async def reservation_cancelled(self, reservation: Reservation, customer: Customer) -> None:
        logger.info(
            "Cancellation email queued",
            extra={
                "reservation_number": reservation.reservation_number,
                "customer_id": customer.id,
                "refund_amount": str(reservation.refund_amount),
            },
        )
