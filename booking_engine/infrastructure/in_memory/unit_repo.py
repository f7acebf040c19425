from collections.abc import Iterable

from booking_engine.application.interfaces.unit_repo import UnitRepo
from booking_engine.domain.entities.unit import Unit


class InMemoryUnitRepo(UnitRepo):
    def __init__(self, units: Iterable[Unit] = ()) -> None:
        self._units: dict[int, Unit] = {unit.id: unit for unit in units}

    async def get_by_id(self, unit_id: int) -> Unit | None:
        return self._units.get(unit_id)

    def add(self, unit: Unit) -> None:
        self._units[unit.id] = unit
