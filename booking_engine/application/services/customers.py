"""Customer Resolver: find-or-create idempotente por email normalizado."""

import logging
from enum import Enum

from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.application.interfaces.transaction_manager import TransactionManager
from booking_engine.application.result import Err, Ok, Result, guard_store
from booking_engine.domain.entities.customer import Customer, normalize_email
from booking_engine.domain.errors import DuplicateCustomerError, StoreUnavailableError

logger = logging.getLogger(__name__)


class CustomerContactPolicy(str, Enum):
    """Qué hacer con nombre/teléfono cuando el cliente ya existe."""

    PRESERVE = "preserve"
    FILL_MISSING = "fill_missing"
    OVERWRITE = "overwrite"


class CustomerResolver:
    """
    Resuelve el cliente de una reservación.

    Dos requests concurrentes con el mismo email nuevo producen un solo
    registro: el perdedor del insert relee la fila ganadora.
    """

    def __init__(
        self,
        customer_repo: CustomerRepo,
        transaction_manager: TransactionManager,
        contact_policy: CustomerContactPolicy = CustomerContactPolicy.PRESERVE,
        store_timeout_seconds: float = 5.0,
    ) -> None:
        self._customer_repo = customer_repo
        self._transaction_manager = transaction_manager
        self._contact_policy = CustomerContactPolicy(contact_policy)
        self._timeout = store_timeout_seconds

    async def resolve(self, email: str, full_name: str, phone: str | None = None) -> Result[Customer]:
        normalized = normalize_email(email)

        resolved = await guard_store(
            self._transaction_manager.run(
                lambda: self._find_or_create(normalized, full_name, phone)
            ),
            timeout=self._timeout,
            operation="customer_resolve",
            expected=(DuplicateCustomerError,),
        )
        if not (isinstance(resolved, Err) and isinstance(resolved.error, DuplicateCustomerError)):
            return resolved

        logger.info("Concurrent customer insert detected, re-reading winner")
        reread = await guard_store(
            self._transaction_manager.run(lambda: self._customer_repo.get_by_email(normalized)),
            timeout=self._timeout,
            operation="customer_reread",
        )
        if isinstance(reread, Err):
            return reread
        if reread.value is None:
            logger.error("Customer vanished after duplicate insert")
            return Err(StoreUnavailableError("customer_reread"))
        return Ok(reread.value)

    async def _find_or_create(self, email: str, full_name: str, phone: str | None) -> Customer:
        existing = await self._customer_repo.get_by_email(email)
        if existing is None:
            return await self._customer_repo.create(
                Customer(full_name=full_name, email=email, phone=phone)
            )

        new_name, new_phone = self._merge_contact(existing, full_name, phone)
        if (new_name, new_phone) != (existing.full_name, existing.phone):
            await self._customer_repo.update_contact(existing.id, new_name, new_phone)
            existing.full_name = new_name
            existing.phone = new_phone
        return existing

    def _merge_contact(
        self, existing: Customer, full_name: str, phone: str | None
    ) -> tuple[str, str | None]:
        if self._contact_policy == CustomerContactPolicy.OVERWRITE:
            return full_name or existing.full_name, phone or existing.phone
        if self._contact_policy == CustomerContactPolicy.FILL_MISSING:
            return existing.full_name or full_name, existing.phone or phone
        return existing.full_name, existing.phone
