"""ERPNext list loaders for client-filtered tables.

ERPNext's resource API is used without server-side paging here: each loader
pulls up to ``cap`` records in one request and the table pages them in
memory (see ``ClientFilteredPageSource``).
"""

import logging
from collections.abc import Callable
from functools import partial
from typing import Any, Generic

from storefront_admin.domain.entities import E, SessionCredentials

from .client import ERPNextClient
from .transformers import customer_from_erp, order_from_sales_invoice, service_from_erp_item

logger = logging.getLogger(__name__)

ITEM_FIELDS = [
    "name", "item_code", "item_name", "item_group", "description",
    "image", "disabled", "standard_rate", "creation", "modified",
]
SALES_INVOICE_FIELDS = [
    "name", "customer", "customer_name", "posting_date", "grand_total",
    "currency", "status", "xendit_invoice_url", "custom_payment_gateway", "modified",
]
CUSTOMER_FIELDS = [
    "name", "customer_name", "customer_type", "customer_primary_email", "creation", "modified",
]


class ErpNextResourceLoader(Generic[E]):
    """Callable loader: list one doctype and transform every record."""

    def __init__(
        self,
        client: ERPNextClient,
        doctype: str,
        fields: list[str],
        transform: Callable[[dict[str, Any]], E],
        *,
        cap: int = 1000,
        order_by: str = "modified desc",
    ):
        self._client = client
        self._doctype = doctype
        self._fields = fields
        self._transform = transform
        self._cap = cap
        self._order_by = order_by

    @property
    def doctype(self) -> str:
        return self._doctype

    async def __call__(self, credentials: SessionCredentials | None = None) -> list[E]:
        records = await self._client.list_resources(
            self._doctype,
            fields=self._fields,
            limit=self._cap,
            order_by=self._order_by,
            credentials=credentials,
        )
        if self._cap > 0 and len(records) >= self._cap:
            logger.warning(
                "%s list hit the fetch cap of %d — older records are not shown",
                self._doctype, self._cap,
            )
        return [self._transform(record) for record in records]


def item_loader(client: ERPNextClient, cap: int) -> ErpNextResourceLoader:
    transform = partial(service_from_erp_item, base_url=client.base_url)
    return ErpNextResourceLoader(client, "Item", ITEM_FIELDS, transform, cap=cap)


def sales_invoice_loader(client: ERPNextClient, cap: int) -> ErpNextResourceLoader:
    return ErpNextResourceLoader(
        client, "Sales Invoice", SALES_INVOICE_FIELDS, order_from_sales_invoice, cap=cap,
    )


def customer_loader(client: ERPNextClient, cap: int) -> ErpNextResourceLoader:
    return ErpNextResourceLoader(client, "Customer", CUSTOMER_FIELDS, customer_from_erp, cap=cap)
