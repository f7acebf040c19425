from booking_engine.domain.entities.unit import Unit


class UnitRepo:
    """Catálogo de unidades en modo solo lectura."""

    async def get_by_id(self, unit_id: int) -> Unit | None:
        raise NotImplementedError
