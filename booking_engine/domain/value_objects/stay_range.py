"""Value Object StayRange - rango de fechas semiabierto [check_in, check_out)."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from booking_engine.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class StayRange:
    """
    Value Object inmutable que representa una estancia.

    El día de check_out no se ocupa, lo que permite la rotación el mismo día.

    Attributes:
        check_in: Primera noche ocupada.
        check_out: Día de salida (no ocupado).
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidDateRangeError()

    @property
    def nights(self) -> int:
        """Número de noches de la estancia."""
        return (self.check_out - self.check_in).days

    def overlaps_with(self, other: "StayRange") -> bool:
        """Prueba estándar de traslape para intervalos semiabiertos."""
        return self.check_in < other.check_out and self.check_out > other.check_in

    def iter_nights(self) -> Iterator[date]:
        """Itera cada noche ocupada, excluyendo el día de salida."""
        for offset in range(self.nights):
            yield self.check_in + timedelta(days=offset)

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"
