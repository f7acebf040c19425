"""Value Object ReservationNumber - número legible y único de reservación."""

import secrets
import string
from dataclasses import dataclass


@dataclass(frozen=True)
class ReservationNumber:
    """
    Value Object inmutable que representa el número público de una reservación.

    Formato: RES- seguido de 8 caracteres alfanuméricos en mayúsculas (ej: RES-A1B2C3D4).
    Se asigna una sola vez al confirmar el insert y nunca se reutiliza.
    """

    value: str

    PREFIX = "RES-"
    CODE_LENGTH = 8
    ALLOWED_CHARS = string.ascii_uppercase + string.digits

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("reservation_number no puede estar vacío")

        if len(self.value) > 32:
            raise ValueError(f"reservation_number excede 32 caracteres: {len(self.value)}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "ReservationNumber":
        """Genera un nuevo número aleatorio."""
        code = "".join(secrets.choice(cls.ALLOWED_CHARS) for _ in range(cls.CODE_LENGTH))
        return cls(value=f"{cls.PREFIX}{code}")

    @classmethod
    def from_string(cls, value: str) -> "ReservationNumber":
        """Normaliza un número recibido del cliente."""
        return cls(value=value.upper().strip())
