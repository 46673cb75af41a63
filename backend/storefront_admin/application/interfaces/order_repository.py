"""Abstract repository interface (port) for orders."""

from abc import ABC, abstractmethod

from storefront_admin.domain.entities import Order


class OrderRepository(ABC):

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Order | None:
        """Look up an order by its human-facing reference, not its document id."""
        ...

    @abstractmethod
    async def get_by_xendit_invoice_id(self, invoice_id: str) -> Order | None:
        ...

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[Order]:
        """All orders of one user, newest first."""
        ...

    @abstractmethod
    async def update_status(
        self,
        doc_id: str,
        status: str,
        xendit_payment_status: str | None = None,
    ) -> Order | None:
        """Set an order's status. Returns None when the document does not exist."""
        ...
