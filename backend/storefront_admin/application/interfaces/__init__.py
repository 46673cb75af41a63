from .page_source import PageSource
from .template_repository import TemplateRepository
from .service_repository import ServiceRepository
from .order_repository import OrderRepository
from .erp_repositories import (
    CustomerRepository,
    ErpItemInput,
    ErpItemRepository,
    NewCustomer,
    SalesInvoiceRepository,
)

__all__ = [
    "PageSource",
    "TemplateRepository",
    "ServiceRepository",
    "OrderRepository",
    "CustomerRepository",
    "ErpItemInput",
    "ErpItemRepository",
    "NewCustomer",
    "SalesInvoiceRepository",
]
