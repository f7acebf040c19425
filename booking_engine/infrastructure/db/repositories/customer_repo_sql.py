"""Implementación SQL del repositorio de clientes."""

from datetime import datetime, timezone

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.errors import DuplicateCustomerError
from booking_engine.infrastructure.db.tables import customers


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CustomerRepoSQL(CustomerRepo):
    """Implementación SQL del repositorio de clientes usando SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, customer_id: int) -> Customer | None:
        stmt = select(customers).where(customers.c.id == customer_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._row_to_entity(row) if row else None

    async def get_by_email(self, email: str) -> Customer | None:
        """Busca por email normalizado; la columna siempre se guarda normalizada."""
        stmt = select(customers).where(customers.c.email == email).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._row_to_entity(row) if row else None

    async def create(self, customer: Customer) -> Customer:
        """Inserta el cliente; la restricción UNIQUE(email) detecta la carrera."""
        now = _utcnow()
        values = {
            "full_name": customer.full_name,
            "email": customer.email,
            "phone": customer.phone,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self._session.execute(insert(customers).values(values))
        except IntegrityError as exc:
            raise DuplicateCustomerError(customer.email) from exc
        customer.id = result.inserted_primary_key[0]
        customer.created_at = now
        customer.updated_at = now
        return customer

    async def update_contact(self, customer_id: int, full_name: str, phone: str | None) -> None:
        stmt = (
            update(customers)
            .where(customers.c.id == customer_id)
            .values(full_name=full_name, phone=phone, updated_at=_utcnow())
        )
        await self._session.execute(stmt)

    def _row_to_entity(self, row) -> Customer:
        return Customer(
            id=row["id"],
            full_name=row["full_name"],
            email=row["email"],
            phone=row.get("phone"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
