"""Abstract interfaces (ports) for ERPNext-backed records.

Every call takes the caller's ``SessionCredentials`` explicitly; ERPNext
applies its own permissions per session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from storefront_admin.domain.entities import Customer, Order, Service, SessionCredentials


@dataclass
class ErpItemInput:
    """Writable fields of an ERPNext ``Item`` used as a storefront service."""

    title: str
    item_group: str
    short_description: str = ""
    long_description: str = ""
    status: str = "active"  # "active" | "inactive"
    image_url: str | None = None
    fixed_price: float = 0
    service_url: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class NewCustomer:
    customer_name: str
    customer_type: str = "Individual"  # "Company" | "Individual"
    customer_primary_email: str = ""


class ErpItemRepository(ABC):
    """Port for services stored as ERPNext Items."""

    @abstractmethod
    async def get_by_name(self, name: str, credentials: SessionCredentials | None = None) -> Service | None:
        ...

    @abstractmethod
    async def create(self, item: ErpItemInput, credentials: SessionCredentials | None = None) -> Service:
        ...

    @abstractmethod
    async def update(
        self, name: str, item: ErpItemInput, credentials: SessionCredentials | None = None
    ) -> Service | None:
        """Returns None when no Item with this name exists."""
        ...

    @abstractmethod
    async def delete(self, name: str, credentials: SessionCredentials | None = None) -> bool:
        ...


class CustomerRepository(ABC):
    """Port for ERPNext customers."""

    @abstractmethod
    async def find_by_email(
        self, email: str, credentials: SessionCredentials | None = None
    ) -> Customer | None:
        ...

    @abstractmethod
    async def create(self, customer: NewCustomer, credentials: SessionCredentials | None = None) -> Customer:
        ...


class SalesInvoiceRepository(ABC):
    """Port for orders recorded as ERPNext Sales Invoices."""

    @abstractmethod
    async def get_by_name(self, name: str, credentials: SessionCredentials | None = None) -> Order | None:
        ...
