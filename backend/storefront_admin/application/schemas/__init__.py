from .entities import (
    CategorySchema,
    CustomerCreate,
    CustomerResponse,
    ErpItemWrite,
    OrderResponse,
    OrderStatusUpdate,
    ServiceResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
)
from .table import (
    Cell,
    ColumnToggle,
    ErrorInfo,
    HeaderCell,
    PaginationFooter,
    Row,
    SortingParam,
    TableEvent,
    TableSessionResponse,
    TableSummary,
    TableView,
)

__all__ = [
    "CategorySchema",
    "CustomerCreate",
    "CustomerResponse",
    "ErpItemWrite",
    "OrderResponse",
    "OrderStatusUpdate",
    "ServiceResponse",
    "TemplateCreate",
    "TemplateResponse",
    "TemplateUpdate",
    "Cell",
    "ColumnToggle",
    "ErrorInfo",
    "HeaderCell",
    "PaginationFooter",
    "Row",
    "SortingParam",
    "TableEvent",
    "TableSessionResponse",
    "TableSummary",
    "TableView",
]
