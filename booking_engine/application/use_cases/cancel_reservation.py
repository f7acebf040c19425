import logging

from booking_engine.application.dtos.reservation_dto import CancellationDTO
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.application.interfaces.notifier import Notifier
from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.result import Err, Ok, Result, guard_store
from booking_engine.application.services.audit import AuditLogWriter
from booking_engine.application.services.notifications import notify_safely
from booking_engine.application.use_cases.lookup_reservation import find_guest_reservation
from booking_engine.domain.cancellation_policy import CancellationPolicy
from booking_engine.domain.entities.audit_entry import AuditAction
from booking_engine.domain.entities.reservation import ReservationStatus
from booking_engine.domain.errors import InvalidReservationStatusError, OptimisticLockError

DEFAULT_CANCELLATION_REASON = "Customer requested cancellation"


class CancelReservationUseCase:
    """
    Cancelación iniciada por el huésped.

    Requiere número + email, calcula el reembolso según la política vigente y
    libera las noches de la unidad.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        customer_repo: CustomerRepo,
        audit_writer: AuditLogWriter,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        clock: Clock,
        policy: CancellationPolicy | None = None,
        store_timeout_seconds: float = 5.0,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._customer_repo = customer_repo
        self._audit_writer = audit_writer
        self._notifier = notifier
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._policy = policy or CancellationPolicy()
        self._timeout = store_timeout_seconds
        self._logger = logging.getLogger(__name__)

    async def execute(
        self, reservation_number: str, email: str, reason: str | None = None
    ) -> Result[CancellationDTO]:
        found = await find_guest_reservation(
            self._reservation_repo,
            self._customer_repo,
            self._transaction_manager,
            reservation_number,
            email,
            self._timeout,
        )
        if isinstance(found, Err):
            return found

        reservation = found.value.reservation
        customer = found.value.customer
        if not reservation.can_transition_to(ReservationStatus.CANCELLED):
            return Err(
                InvalidReservationStatusError(
                    current_status=reservation.status.value,
                    target_status=ReservationStatus.CANCELLED.value,
                    operation="cancel reservation",
                )
            )

        refund = self._policy.quote(reservation.amount_paid, reservation.check_in, self._clock.today())
        expected_lock_version = reservation.lock_version
        reservation.cancel(
            cancelled_at=self._clock.now(),
            reason=(reason or "").strip() or DEFAULT_CANCELLATION_REASON,
            refund_amount=refund.amount,
        )

        saved = await guard_store(
            self._transaction_manager.run(
                lambda: self._reservation_repo.update(reservation, expected_lock_version)
            ),
            timeout=self._timeout,
            operation="reservation_cancel",
            expected=(OptimisticLockError,),
        )
        if isinstance(saved, Err):
            return saved

        self._logger.info(
            "Reservation cancelled",
            extra={
                "reservation_number": reservation.reservation_number,
                "refund_percent": refund.percent,
                "days_remaining": refund.days_remaining,
            },
        )
        await self._audit_writer.write(
            AuditAction.BOOKING_CANCELLED,
            actor_id=str(customer.id),
            details=(
                f"Reservation {reservation.reservation_number} cancelled, "
                f"refund {refund.percent}%"
            ),
        )
        await notify_safely(
            self._notifier.reservation_cancelled(reservation, customer),
            event="reservation_cancelled",
            reservation_number=reservation.reservation_number,
        )
        return Ok(CancellationDTO(reservation=reservation, refund=refund))
