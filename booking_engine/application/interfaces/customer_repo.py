"""Interface CustomerRepo - Puerto para persistencia de clientes."""

from booking_engine.domain.entities.customer import Customer


class CustomerRepo:
    """
    Puerto para el repositorio de clientes.

    El email se guarda normalizado y con restricción de unicidad.
    """

    async def get_by_id(self, customer_id: int) -> Customer | None:
        raise NotImplementedError

    async def get_by_email(self, email: str) -> Customer | None:
        """
        Busca un cliente por email normalizado (coincidencia exacta, sin mayúsculas).

        Args:
            email: Email ya normalizado.

        Returns:
            El cliente o None.
        """
        raise NotImplementedError

    async def create(self, customer: Customer) -> Customer:
        """
        Inserta un nuevo cliente.

        Raises:
            DuplicateCustomerError: Si otro request ya insertó el mismo email.
        """
        raise NotImplementedError

    async def update_contact(self, customer_id: int, full_name: str, phone: str | None) -> None:
        raise NotImplementedError
