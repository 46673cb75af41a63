from .category import Category
from .customer import Customer
from .order import Order, PurchasedItem
from .service import (
    FaqItem,
    JourneyStage,
    PackageFeature,
    PricingDetails,
    Service,
    ServicePackage,
)
from .table import (
    PAGE_SIZE_ALL,
    E,
    ColumnFilter,
    ErrorKind,
    FetchFailure,
    FetchStatus,
    PageOutcome,
    PageRequest,
    PageResult,
    QueryMode,
    SessionCredentials,
    SortSpec,
    TableState,
    compute_page_count,
)
from .template import Template
from .user_profile import UserProfile

__all__ = [
    "Category",
    "Customer",
    "Order",
    "PurchasedItem",
    "FaqItem",
    "JourneyStage",
    "PackageFeature",
    "PricingDetails",
    "Service",
    "ServicePackage",
    "PAGE_SIZE_ALL",
    "E",
    "ColumnFilter",
    "ErrorKind",
    "FetchFailure",
    "FetchStatus",
    "PageOutcome",
    "PageRequest",
    "PageResult",
    "QueryMode",
    "SessionCredentials",
    "SortSpec",
    "TableState",
    "compute_page_count",
    "Template",
    "UserProfile",
]
