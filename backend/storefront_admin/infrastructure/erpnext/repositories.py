"""ERPNext implementations of the ERP repository ports."""

import logging

from storefront_admin.application.interfaces import (
    CustomerRepository,
    ErpItemInput,
    ErpItemRepository,
    NewCustomer,
    SalesInvoiceRepository,
)
from storefront_admin.domain.entities import Customer, Order, Service, SessionCredentials

from .client import ERPNextClient
from .page_sources import CUSTOMER_FIELDS
from .transformers import (
    customer_from_erp,
    erp_customer_payload,
    erp_item_payload,
    order_from_sales_invoice,
    service_from_erp_item,
)

logger = logging.getLogger(__name__)


class ErpNextItemRepository(ErpItemRepository):
    """Services stored as ERPNext ``Item`` documents."""

    def __init__(self, client: ERPNextClient):
        self._client = client

    async def get_by_name(self, name: str, credentials: SessionCredentials | None = None) -> Service | None:
        record = await self._client.get_resource("Item", name, credentials=credentials)
        if record is None:
            return None
        return service_from_erp_item(record, base_url=self._client.base_url)

    async def create(self, item: ErpItemInput, credentials: SessionCredentials | None = None) -> Service:
        record = await self._client.create_resource("Item", erp_item_payload(item), credentials=credentials)
        logger.info("Created ERPNext Item '%s'", record.get("name", item.title))
        return service_from_erp_item(record, base_url=self._client.base_url)

    async def update(
        self, name: str, item: ErpItemInput, credentials: SessionCredentials | None = None
    ) -> Service | None:
        record = await self._client.update_resource(
            "Item", name, erp_item_payload(item), credentials=credentials
        )
        if record is None:
            return None
        return service_from_erp_item(record, base_url=self._client.base_url)

    async def delete(self, name: str, credentials: SessionCredentials | None = None) -> bool:
        return await self._client.delete_resource("Item", name, credentials=credentials)


class ErpNextCustomerRepository(CustomerRepository):

    def __init__(self, client: ERPNextClient):
        self._client = client

    async def find_by_email(
        self, email: str, credentials: SessionCredentials | None = None
    ) -> Customer | None:
        records = await self._client.list_resources(
            "Customer",
            fields=CUSTOMER_FIELDS,
            filters=[["customer_primary_email", "=", email]],
            limit=1,
            credentials=credentials,
        )
        return customer_from_erp(records[0]) if records else None

    async def create(self, customer: NewCustomer, credentials: SessionCredentials | None = None) -> Customer:
        record = await self._client.create_resource(
            "Customer", erp_customer_payload(customer), credentials=credentials
        )
        logger.info("Created ERPNext Customer '%s'", record.get("name", customer.customer_name))
        return customer_from_erp(record)


class ErpNextSalesInvoiceRepository(SalesInvoiceRepository):
    """Orders read back from ERPNext ``Sales Invoice`` documents."""

    def __init__(self, client: ERPNextClient):
        self._client = client

    async def get_by_name(self, name: str, credentials: SessionCredentials | None = None) -> Order | None:
        record = await self._client.get_resource("Sales Invoice", name, credentials=credentials)
        if record is None:
            return None
        return order_from_sales_invoice(record)
