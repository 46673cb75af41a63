"""Application services for ERPNext-backed items, sales invoices and customers.

Every method takes the caller's ``SessionCredentials`` and hands them to the
repository unchanged.
"""

import logging

from storefront_admin.application.interfaces import (
    CustomerRepository,
    ErpItemInput,
    ErpItemRepository,
    NewCustomer,
    SalesInvoiceRepository,
)
from storefront_admin.application.schemas import CustomerCreate, ErpItemWrite
from storefront_admin.domain.entities import Customer, Order, Service, SessionCredentials
from storefront_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)


def _item_input(data: ErpItemWrite) -> ErpItemInput:
    return ErpItemInput(**data.model_dump())


class ErpItemService:
    def __init__(self, repository: ErpItemRepository):
        self._repository = repository

    async def get_item(self, name: str, credentials: SessionCredentials | None = None) -> Service:
        item = await self._repository.get_by_name(name, credentials)
        if item is None:
            raise EntityNotFoundError("Item", name)
        return item

    async def create_item(self, data: ErpItemWrite, credentials: SessionCredentials | None = None) -> Service:
        return await self._repository.create(_item_input(data), credentials)

    async def update_item(
        self, name: str, data: ErpItemWrite, credentials: SessionCredentials | None = None
    ) -> Service:
        item = await self._repository.update(name, _item_input(data), credentials)
        if item is None:
            raise EntityNotFoundError("Item", name)
        return item

    async def delete_item(self, name: str, credentials: SessionCredentials | None = None) -> bool:
        deleted = await self._repository.delete(name, credentials)
        if not deleted:
            raise EntityNotFoundError("Item", name)
        return deleted


class SalesInvoiceService:
    def __init__(self, repository: SalesInvoiceRepository):
        self._repository = repository

    async def get_invoice(self, name: str, credentials: SessionCredentials | None = None) -> Order:
        invoice = await self._repository.get_by_name(name, credentials)
        if invoice is None:
            raise EntityNotFoundError("Sales Invoice", name)
        return invoice


class CustomerService:
    def __init__(self, repository: CustomerRepository):
        self._repository = repository

    async def create_customer(
        self, data: CustomerCreate, credentials: SessionCredentials | None = None
    ) -> Customer:
        """Create a customer; a primary email may belong to one customer only."""
        email = (data.customer_primary_email or "").strip()
        if email:
            existing = await self._repository.find_by_email(email, credentials)
            if existing is not None:
                logger.info("Customer with email %s already exists (%s)", email, existing.id)
                raise DuplicateEntityError("Customer", "customer_primary_email", email)
        return await self._repository.create(
            NewCustomer(
                customer_name=data.customer_name.strip(),
                customer_type=data.customer_type,
                customer_primary_email=email,
            ),
            credentials,
        )
