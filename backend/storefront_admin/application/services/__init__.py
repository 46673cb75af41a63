from .erp_services import CustomerService, ErpItemService, SalesInvoiceService
from .order_service import OrderService
from .service_catalog_service import ServiceCatalogService
from .table_registry import TableDefinition, TableRegistry
from .table_service import TableService, parse_filter_params
from .table_sessions import TableSession, TableSessionManager
from .template_service import TemplateService

__all__ = [
    "CustomerService",
    "ErpItemService",
    "OrderService",
    "SalesInvoiceService",
    "ServiceCatalogService",
    "TableDefinition",
    "TableRegistry",
    "TableService",
    "parse_filter_params",
    "TableSession",
    "TableSessionManager",
    "TemplateService",
]
