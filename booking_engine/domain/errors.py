"""Excepciones de dominio para el motor de reservaciones."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.field = field


class InvalidDateRangeError(ValidationError):
    """Rango de fechas inválido (check_out <= check_in)."""

    def __init__(self, message: str = "Check-out date must be after check-in date"):
        super().__init__(field="check_out", message=message)
        self.code = "INVALID_DATE_RANGE"


class PricingValidationError(DomainError):
    """El cálculo de precio no es posible para la solicitud (huéspedes, noches, descuento)."""

    def __init__(self, message: str):
        super().__init__(message=message, code="PRICING_VALIDATION_ERROR")


# === Errores de Unidad / Disponibilidad ===


class UnitNotFoundError(DomainError):
    """La unidad no existe en el catálogo o no está activa."""

    def __init__(self, unit_id: int):
        super().__init__(message="Unit not found", code="UNIT_NOT_FOUND")
        self.unit_id = unit_id


class UnitNotAvailableError(DomainError):
    """La unidad ya está ocupada en alguna noche del rango solicitado."""

    def __init__(self, unit_id: int):
        super().__init__(
            message="Unit is not available for the selected dates",
            code="UNIT_NOT_AVAILABLE",
        )
        self.unit_id = unit_id


# === Errores de Integridad de Precio ===


class PricingMismatchError(DomainError):
    """
    El precio enviado por el cliente no coincide con el calculado por el servidor.

    El mensaje es genérico a propósito: nunca incluye el monto esperado.
    """

    def __init__(self, unit_id: int):
        super().__init__(
            message="Pricing verification failed. Please refresh and try again.",
            code="PRICING_MISMATCH",
        )
        self.unit_id = unit_id


# === Errores de Reservación ===


class ReservationNotFoundError(DomainError):
    """
    La reservación no existe o el email no corresponde.

    Ambos casos usan el mismo mensaje para no permitir enumerar números válidos.
    """

    def __init__(self) -> None:
        super().__init__(
            message="Reservation not found. Please check your reservation number and email.",
            code="RESERVATION_NOT_FOUND",
        )


class ReservationNumberConflictError(DomainError):
    """El número de reservación generado ya fue emitido anteriormente."""

    def __init__(self, reservation_number: str):
        super().__init__(
            message=f"Reservation number already issued: {reservation_number}",
            code="RESERVATION_NUMBER_CONFLICT",
        )
        self.reservation_number = reservation_number


class InvalidReservationStatusError(DomainError):
    """El estado de la reservación no permite la operación."""

    def __init__(self, current_status: str, target_status: str, operation: str):
        super().__init__(
            message=f"Cannot {operation}: reservation is '{current_status}', "
            f"transition to '{target_status}' is not allowed",
            code="INVALID_RESERVATION_STATUS",
        )
        self.current_status = current_status
        self.target_status = target_status
        self.operation = operation


class OptimisticLockError(DomainError):
    """Conflicto de concurrencia al actualizar la reservación."""

    def __init__(self, reservation_number: str, expected_version: int):
        super().__init__(
            message=f"Reservation {reservation_number} was modified concurrently, please retry",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.reservation_number = reservation_number
        self.expected_version = expected_version


# === Errores de Cliente ===


class DuplicateCustomerError(DomainError):
    """Otro request creó el cliente con el mismo email de forma concurrente."""

    def __init__(self, email: str):
        super().__init__(message="Customer already exists", code="DUPLICATE_CUSTOMER")
        self.email = email


# === Errores de Infraestructura ===


class StoreUnavailableError(DomainError):
    """El almacén de datos no respondió o falló; el detalle solo se registra en logs."""

    def __init__(self, operation: str = "store"):
        super().__init__(
            message="Service temporarily unavailable. Please try again later.",
            code="STORE_UNAVAILABLE",
        )
        self.operation = operation
