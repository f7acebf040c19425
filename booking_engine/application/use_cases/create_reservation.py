import logging
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal

from booking_engine.application.dtos.reservation_dto import (
    CreateReservationDTO,
    ReservationCreatedDTO,
)
from booking_engine.application.interfaces.clock import Clock
from booking_engine.application.interfaces.notifier import Notifier
from booking_engine.application.interfaces.reservation_repo import ReservationRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.interfaces.unit_repo import UnitRepo
from booking_engine.application.result import Err, Ok, Result, guard_store
from booking_engine.application.services.audit import AuditLogWriter
from booking_engine.application.services.availability import AvailabilityOracle
from booking_engine.application.services.customers import CustomerResolver
from booking_engine.application.services.integrity import IntegrityGuard
from booking_engine.application.services.notifications import notify_safely
from booking_engine.application.services.pricing import PricingCalculator
from booking_engine.application.validation import ValidatedBooking, validate_create_command
from booking_engine.domain.entities.audit_entry import AuditAction
from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.entities.reservation import (
    ApprovalStatus,
    PaymentOption,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)
from booking_engine.domain.entities.unit import Unit
from booking_engine.domain.errors import (
    ReservationNumberConflictError,
    StoreUnavailableError,
    UnitNotAvailableError,
    UnitNotFoundError,
    ValidationError,
)
from booking_engine.domain.value_objects.price_breakdown import PriceBreakdown
from booking_engine.domain.value_objects.reservation_number import ReservationNumber

DEFAULT_DEPOSIT_PERCENT = 30
MAX_NUMBER_ATTEMPTS = 5
WHOLE_UNIT = Decimal("1")


def _generate_reservation_number() -> str:
    return ReservationNumber.generate().value


class CreateReservationUseCase:
    """
    Crea una reservación exactamente una vez.

    validar -> cliente -> disponibilidad -> precio -> integridad -> commit -> auditoría.
    Cada etapa retorna Ok/Err y el flujo se corta en el primer Err. Solo el
    cliente legítimamente creado sobrevive a una falla posterior.
    """

    def __init__(
        self,
        unit_repo: UnitRepo,
        reservation_repo: ReservationRepo,
        customer_resolver: CustomerResolver,
        availability_oracle: AvailabilityOracle,
        pricing_calculator: PricingCalculator,
        integrity_guard: IntegrityGuard,
        audit_writer: AuditLogWriter,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        clock: Clock,
        number_generator: Callable[[], str] = _generate_reservation_number,
        default_deposit_percent: int = DEFAULT_DEPOSIT_PERCENT,
        store_timeout_seconds: float = 5.0,
        max_number_attempts: int = MAX_NUMBER_ATTEMPTS,
    ) -> None:
        self._unit_repo = unit_repo
        self._reservation_repo = reservation_repo
        self._customer_resolver = customer_resolver
        self._availability_oracle = availability_oracle
        self._pricing_calculator = pricing_calculator
        self._integrity_guard = integrity_guard
        self._audit_writer = audit_writer
        self._notifier = notifier
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._number_generator = number_generator
        self._default_deposit_percent = default_deposit_percent
        self._timeout = store_timeout_seconds
        self._max_number_attempts = max_number_attempts
        self._logger = logging.getLogger(__name__)

    async def execute(self, command: CreateReservationDTO) -> Result[ReservationCreatedDTO]:
        validated = validate_create_command(command)
        if isinstance(validated, Err):
            return validated
        booking = validated.value

        customer = await self._customer_resolver.resolve(
            booking.email, booking.full_name, booking.phone
        )
        if isinstance(customer, Err):
            return customer

        unit = await self._load_unit(command.unit_id)
        if isinstance(unit, Err):
            return unit

        available = await self._availability_oracle.ensure_available(unit.value.id, booking.stay)
        if isinstance(available, Err):
            return available

        expected = self._pricing_calculator.calculate(
            unit.value,
            booking.stay.check_in,
            booking.stay.check_out,
            command.guest_count,
            command.pricing.discount_amount,
        )
        if isinstance(expected, Err):
            return expected

        verified = await self._integrity_guard.verify(command.pricing, expected.value, unit.value.id)
        if isinstance(verified, Err):
            return verified

        reservation = self._build_reservation(
            command, booking, customer.value, unit.value, verified.value
        )
        if isinstance(reservation, Err):
            return reservation

        committed = await self._commit(reservation.value)
        if isinstance(committed, Err):
            return committed
        saved = committed.value

        self._logger.info(
            "Reservation created",
            extra={
                "reservation_number": saved.reservation_number,
                "unit_id": saved.unit_id,
                "status": saved.status.value,
            },
        )
        await self._audit_writer.write(
            AuditAction.BOOKING_CREATED,
            actor_id=str(customer.value.id),
            details=f"Reservation {saved.reservation_number} created for unit {saved.unit_id}",
        )
        await notify_safely(
            self._notifier.reservation_created(saved, customer.value),
            event="reservation_created",
            reservation_number=saved.reservation_number,
        )

        return Ok(
            ReservationCreatedDTO(
                reservation_id=saved.id,
                reservation_number=saved.reservation_number,
                customer_id=customer.value.id,
            )
        )

    async def _load_unit(self, unit_id: int) -> Result[Unit]:
        loaded = await guard_store(
            self._transaction_manager.run(lambda: self._unit_repo.get_by_id(unit_id)),
            timeout=self._timeout,
            operation="unit_lookup",
        )
        if isinstance(loaded, Err):
            return loaded
        if loaded.value is None or not loaded.value.is_active:
            return Err(UnitNotFoundError(unit_id))
        return Ok(loaded.value)

    def _deposit_for(self, total: Decimal, requested: Decimal | None) -> Decimal:
        if requested is not None:
            return Decimal(requested)
        percent = Decimal(self._default_deposit_percent) / Decimal(100)
        return (total * percent).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)

    def _build_reservation(
        self,
        command: CreateReservationDTO,
        booking: ValidatedBooking,
        customer: Customer,
        unit: Unit,
        pricing: PriceBreakdown,
    ) -> Result[Reservation]:
        total = pricing.total_amount

        if booking.payment_option == PaymentOption.FULL:
            status, payment_status, approval, paid = (
                ReservationStatus.CONFIRMED,
                PaymentStatus.PAID,
                ApprovalStatus.APPROVED,
                total,
            )
        elif booking.payment_option == PaymentOption.PARTIAL:
            deposit = self._deposit_for(total, command.deposit_amount)
            if not Decimal("0") < deposit < total:
                return Err(
                    ValidationError(
                        "deposit_amount",
                        "Deposit must be greater than zero and less than the total amount",
                    )
                )
            status, payment_status, approval, paid = (
                ReservationStatus.CONFIRMED,
                PaymentStatus.PARTIAL,
                ApprovalStatus.APPROVED,
                deposit,
            )
        else:
            status, payment_status, approval, paid = (
                ReservationStatus.PENDING,
                PaymentStatus.PENDING,
                ApprovalStatus.PENDING,
                Decimal("0"),
            )

        return Ok(
            Reservation(
                unit_id=unit.id,
                customer_id=customer.id,
                check_in=booking.stay.check_in,
                check_out=booking.stay.check_out,
                guest_count=command.guest_count,
                base_amount=pricing.base_amount,
                cleaning_fee=pricing.cleaning_fee,
                tax_amount=pricing.tax_amount,
                discount_amount=pricing.discount_amount,
                total_amount=total,
                amount_paid=paid,
                status=status,
                payment_status=payment_status,
                approval_status=approval,
                payment_option=booking.payment_option,
                notes=command.guest.notes,
                created_at=self._clock.now(),
            )
        )

    async def _commit(self, reservation: Reservation) -> Result[Reservation]:
        """
        Verifica el traslape e inserta en una sola transacción.

        El número se asigna aquí; si choca con uno ya emitido se genera otro.
        """
        for attempt in range(1, self._max_number_attempts + 1):
            reservation.reservation_number = self._number_generator()
            committed = await guard_store(
                self._transaction_manager.run(lambda: self._check_and_insert(reservation)),
                timeout=self._timeout,
                operation="reservation_commit",
                expected=(UnitNotAvailableError, ReservationNumberConflictError),
            )
            if isinstance(committed, Err) and isinstance(
                committed.error, ReservationNumberConflictError
            ):
                self._logger.warning(
                    "Reservation number collision, regenerating",
                    extra={"attempt": attempt},
                )
                continue
            return committed

        self._logger.error(
            "Could not allocate a unique reservation number",
            extra={"attempts": self._max_number_attempts},
        )
        return Err(StoreUnavailableError("reservation_number"))

    async def _check_and_insert(self, reservation: Reservation) -> Reservation:
        if await self._reservation_repo.has_active_overlap(
            reservation.unit_id, reservation.check_in, reservation.check_out
        ):
            raise UnitNotAvailableError(reservation.unit_id)
        return await self._reservation_repo.insert(reservation)
