"""Entidad Customer - identidad de un huésped, única por email."""

from dataclasses import dataclass
from datetime import datetime


def normalize_email(email: str) -> str:
    """Forma canónica usada para la unicidad case-insensitive."""
    return email.strip().lower()


@dataclass
class Customer:
    """
    Cliente que reserva unidades.

    Se crea una vez por email distinto; las reservas posteriores reutilizan el id.
    """

    id: int | None = None
    full_name: str = ""
    email: str = ""
    phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def matches_email(self, email: str) -> bool:
        return normalize_email(self.email) == normalize_email(email)
