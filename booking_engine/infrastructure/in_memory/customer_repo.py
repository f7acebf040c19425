"""Implementación in-memory del repositorio de clientes."""

import threading
from copy import deepcopy
from datetime import datetime, timezone

from booking_engine.application.interfaces.customer_repo import CustomerRepo
from booking_engine.domain.entities.customer import Customer
from booking_engine.domain.errors import DuplicateCustomerError


class InMemoryCustomerRepo(CustomerRepo):
    """
    Implementación in-memory para testing y modo demo.

    El índice por email hace el papel de la restricción UNIQUE del almacén SQL.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._customers: dict[int, Customer] = {}
        self._by_email: dict[str, int] = {}
        self._next_id = 1

    async def get_by_id(self, customer_id: int) -> Customer | None:
        with self._lock:
            customer = self._customers.get(customer_id)
            return deepcopy(customer) if customer else None

    async def get_by_email(self, email: str) -> Customer | None:
        with self._lock:
            customer_id = self._by_email.get(email)
            return deepcopy(self._customers[customer_id]) if customer_id else None

    async def create(self, customer: Customer) -> Customer:
        now = datetime.now(timezone.utc)
        with self._lock:
            if customer.email in self._by_email:
                raise DuplicateCustomerError(customer.email)
            customer.id = self._next_id
            customer.created_at = now
            customer.updated_at = now
            self._next_id += 1
            self._customers[customer.id] = deepcopy(customer)
            self._by_email[customer.email] = customer.id
        return customer

    async def update_contact(self, customer_id: int, full_name: str, phone: str | None) -> None:
        with self._lock:
            stored = self._customers.get(customer_id)
            if stored is None:
                return
            stored.full_name = full_name
            stored.phone = phone
            stored.updated_at = datetime.now(timezone.utc)

    def count(self) -> int:
        with self._lock:
            return len(self._customers)
