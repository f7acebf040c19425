"""Validación de forma del comando de creación, para llamadores fuera de HTTP."""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from booking_engine.application.dtos.reservation_dto import CreateReservationDTO
from booking_engine.application.result import Err, Ok, Result
from booking_engine.domain.entities.customer import normalize_email
from booking_engine.domain.entities.reservation import PaymentOption
from booking_engine.domain.errors import ValidationError
from booking_engine.domain.value_objects.stay_range import StayRange

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_GUESTS = 1
MAX_GUESTS = 50
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


@dataclass(frozen=True)
class ValidatedBooking:
    stay: StayRange
    email: str
    full_name: str
    phone: str | None
    payment_option: PaymentOption


def parse_iso_date(value: date | str, field: str) -> date:
    """
    Raises:
        ValidationError: Si el valor no es una fecha yyyy-mm-dd válida.
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise ValidationError(field, "Invalid date format, expected yyyy-mm-dd")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(field, "Invalid date format, expected yyyy-mm-dd") from exc


def validate_create_command(command: CreateReservationDTO) -> Result[ValidatedBooking]:
    try:
        check_in = parse_iso_date(command.check_in, "check_in")
        check_out = parse_iso_date(command.check_out, "check_out")
        stay = StayRange(check_in=check_in, check_out=check_out)
    except ValidationError as exc:
        return Err(exc)

    if command.unit_id < 1:
        return Err(ValidationError("unit_id", "Invalid unit"))

    if not MIN_GUESTS <= command.guest_count <= MAX_GUESTS:
        return Err(
            ValidationError("guest_count", f"Guest count must be between {MIN_GUESTS} and {MAX_GUESTS}")
        )

    full_name = command.guest.full_name.strip()
    if not MIN_NAME_LENGTH <= len(full_name) <= MAX_NAME_LENGTH:
        return Err(
            ValidationError(
                "full_name",
                f"Name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters",
            )
        )

    email = normalize_email(command.guest.email)
    if not EMAIL_PATTERN.match(email):
        return Err(ValidationError("email", "Invalid email address"))

    try:
        payment_option = PaymentOption(command.payment_option)
    except ValueError:
        return Err(ValidationError("payment_option", "Unknown payment option"))

    if command.deposit_amount is not None and Decimal(command.deposit_amount) <= 0:
        return Err(ValidationError("deposit_amount", "Deposit must be greater than zero"))

    phone = command.guest.phone.strip() if command.guest.phone else None
    return Ok(
        ValidatedBooking(
            stay=stay,
            email=email,
            full_name=full_name,
            phone=phone or None,
            payment_option=payment_option,
        )
    )
