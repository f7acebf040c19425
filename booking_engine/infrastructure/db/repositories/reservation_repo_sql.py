import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.domain.entities.reservation import (
    ACTIVE_STATUSES,
    ApprovalStatus,
    PaymentOption,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)
from booking_engine.domain.errors import (
    OptimisticLockError,
    ReservationNumberConflictError,
    StoreUnavailableError,
    UnitNotAvailableError,
)
from booking_engine.infrastructure.db.tables import reservation_nights, reservations

logger = logging.getLogger(__name__)

ACTIVE_STATUS_VALUES = tuple(status.value for status in ACTIVE_STATUSES)

# SQLite names the columns, MySQL names the key
NIGHT_CONSTRAINT_MARKERS = ("uq_reservation_nights_unit_night", "reservation_nights.unit_id")
UNIQUE_VIOLATION_MARKERS = ("UNIQUE constraint failed", "Duplicate entry")


def _is_unique_violation(exc: IntegrityError, *markers: str) -> bool:
    """Indica si el driver reporta un choque de llave única sobre alguno de `markers`."""
    message = str(exc.orig)
    if not any(marker in message for marker in UNIQUE_VIOLATION_MARKERS):
        return False
    return any(marker in message for marker in markers)


def _naive_utc(value: datetime | None) -> datetime | None:
    """Las columnas DateTime guardan UTC sin zona horaria."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ReservationRepoSQL(ReservationRepo):
    """
    Libro de reservaciones en SQL.

    La exclusión de traslapes se apoya en la tabla reservation_nights: cada
    noche ocupada es una fila con UNIQUE(unit_id, night), escrita en la misma
    transacción que la reservación.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def has_active_overlap(self, unit_id: int, check_in: date, check_out: date) -> bool:
        stmt = (
            select(reservations.c.id)
            .where(
                reservations.c.unit_id == unit_id,
                reservations.c.status.in_(ACTIVE_STATUS_VALUES),
                reservations.c.check_in < check_out,
                reservations.c.check_out > check_in,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar() is not None

    async def insert(self, reservation: Reservation) -> Reservation:
        values = self._to_row(reservation)
        try:
            result = await self._session.execute(insert(reservations).values(values))
        except IntegrityError as exc:
            if _is_unique_violation(exc, "reservation_number"):
                raise ReservationNumberConflictError(reservation.reservation_number) from exc
            logger.error(
                "Integrity error inserting reservation",
                exc_info=exc,
                extra={"reservation_number": reservation.reservation_number},
            )
            raise StoreUnavailableError("reservation_insert") from exc
        reservation_id = result.inserted_primary_key[0]

        night_rows = [
            {"reservation_id": reservation_id, "unit_id": reservation.unit_id, "night": night}
            for night in reservation.stay.iter_nights()
        ]
        try:
            await self._session.execute(insert(reservation_nights), night_rows)
        except IntegrityError as exc:
            if _is_unique_violation(exc, *NIGHT_CONSTRAINT_MARKERS):
                raise UnitNotAvailableError(reservation.unit_id) from exc
            logger.error(
                "Integrity error inserting reserved nights",
                exc_info=exc,
                extra={"reservation_number": reservation.reservation_number},
            )
            raise StoreUnavailableError("reservation_insert") from exc

        reservation.id = reservation_id
        return reservation

    async def get_by_number(self, reservation_number: str) -> Reservation | None:
        stmt = (
            select(reservations)
            .where(reservations.c.reservation_number == reservation_number)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return self._row_to_entity(row)

    async def update(self, reservation: Reservation, expected_lock_version: int) -> None:
        stmt = (
            update(reservations)
            .where(
                reservations.c.id == reservation.id,
                reservations.c.lock_version == expected_lock_version,
            )
            .values(
                status=reservation.status.value,
                payment_status=reservation.payment_status.value,
                approval_status=reservation.approval_status.value,
                refund_amount=reservation.refund_amount,
                cancelled_at=_naive_utc(reservation.cancelled_at),
                cancellation_reason=reservation.cancellation_reason,
                lock_version=reservations.c.lock_version + 1,
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            raise OptimisticLockError(reservation.reservation_number, expected_lock_version)

        if not reservation.is_active:
            await self._session.execute(
                delete(reservation_nights).where(
                    reservation_nights.c.reservation_id == reservation.id
                )
            )
        reservation.lock_version = expected_lock_version + 1

    def _to_row(self, reservation: Reservation) -> dict:
        return {
            "reservation_number": reservation.reservation_number,
            "unit_id": reservation.unit_id,
            "customer_id": reservation.customer_id,
            "check_in": reservation.check_in,
            "check_out": reservation.check_out,
            "guest_count": reservation.guest_count,
            "base_amount": reservation.base_amount,
            "cleaning_fee": reservation.cleaning_fee,
            "tax_amount": reservation.tax_amount,
            "discount_amount": reservation.discount_amount,
            "total_amount": reservation.total_amount,
            "amount_paid": reservation.amount_paid,
            "refund_amount": reservation.refund_amount,
            "status": reservation.status.value,
            "payment_status": reservation.payment_status.value,
            "approval_status": reservation.approval_status.value,
            "payment_option": reservation.payment_option.value,
            "notes": reservation.notes,
            "created_at": _naive_utc(reservation.created_at),
            "lock_version": reservation.lock_version,
        }

    def _row_to_entity(self, row) -> Reservation:
        return Reservation(
            id=row["id"],
            reservation_number=row["reservation_number"],
            unit_id=row["unit_id"],
            customer_id=row["customer_id"],
            check_in=row["check_in"],
            check_out=row["check_out"],
            guest_count=row["guest_count"],
            base_amount=Decimal(row["base_amount"]),
            cleaning_fee=Decimal(row["cleaning_fee"]),
            tax_amount=Decimal(row["tax_amount"]),
            discount_amount=Decimal(row["discount_amount"]),
            total_amount=Decimal(row["total_amount"]),
            amount_paid=Decimal(row["amount_paid"]),
            refund_amount=Decimal(row["refund_amount"] or 0),
            status=ReservationStatus(row["status"]),
            payment_status=PaymentStatus(row["payment_status"]),
            approval_status=ApprovalStatus(row["approval_status"]),
            payment_option=PaymentOption(row["payment_option"]),
            notes=row["notes"],
            created_at=row["created_at"],
            cancelled_at=row["cancelled_at"],
            cancellation_reason=row["cancellation_reason"],
            lock_version=row["lock_version"],
        )
