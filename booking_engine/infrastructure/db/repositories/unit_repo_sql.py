from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.unit_repo import UnitRepo
from booking_engine.domain.entities.unit import Unit
from booking_engine.infrastructure.db.tables import units


class UnitRepoSQL(UnitRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, unit_id: int) -> Unit | None:
        stmt = select(units).where(units.c.id == unit_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return Unit(
            id=row["id"],
            name=row["name"],
            base_price_per_night=row["base_price_per_night"],
            cleaning_fee=row["cleaning_fee"],
            max_occupancy=row["max_occupancy"],
            is_active=bool(row["is_active"]),
        )
