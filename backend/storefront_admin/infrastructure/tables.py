"""Concrete table definitions for the storefront back-office.

Firestore tables page on the server; ERPNext tables load the doctype once
and page in memory. Column ``sort_field``/``filter_field`` values are
Firestore field names and only matter for server-paginated tables.
"""

from collections.abc import Callable
from typing import Any

from storefront_admin.application.interfaces import PageSource
from storefront_admin.application.services import TableDefinition, TableRegistry
from storefront_admin.application.table.client_query import ClientFilteredPageSource
from storefront_admin.application.table.columns import ColumnDefinition, ColumnKind
from storefront_admin.config import Settings
from storefront_admin.domain.entities import QueryMode, SortSpec, TableState
from storefront_admin.infrastructure.erpnext.client import ERPNextClient
from storefront_admin.infrastructure.erpnext.page_sources import (
    customer_loader,
    item_loader,
    sales_invoice_loader,
)
from storefront_admin.infrastructure.firestore.customer_stats import CustomerStatsPageSource
from storefront_admin.infrastructure.firestore.page_source import FirestorePageSource
from storefront_admin.infrastructure.firestore.repositories import (
    ORDERS,
    SERVICES,
    TEMPLATES,
    USERS,
    FirestoreOrderRepository,
)
from storefront_admin.infrastructure.firestore.transformers import (
    order_from_firestore,
    service_from_firestore,
    template_from_firestore,
    user_profile_from_firestore,
)

NEWEST_FIRST = TableState(sorting=(SortSpec("created_at", descending=True),))


def _money(value: Any, entity: Any) -> str:
    currency = getattr(entity, "currency", "IDR") or "IDR"
    amount = value if isinstance(value, (int, float)) else 0
    return f"{currency} {amount:,.0f}"


def _created_at() -> ColumnDefinition:
    return ColumnDefinition(
        id="created_at", header="Created", kind=ColumnKind.DATE, sort_field="createdAt",
    )


# ── Column sets ──

SERVICE_COLUMNS = (
    ColumnDefinition(
        id="title", header="Title", hideable=False, filterable=True,
        sort_field="title", filter_field="title_lowercase",
    ),
    ColumnDefinition(id="category", header="Category", accessor="category.name", sort_field="categoryId"),
    ColumnDefinition(
        id="status", header="Status", filterable=True, sort_field="status", filter_field="status",
    ),
    ColumnDefinition(id="pricing", header="Pricing", accessor="pricing.pricing_model", sortable=False),
    ColumnDefinition(id="tags", header="Tags", kind=ColumnKind.LIST, sortable=False),
    _created_at(),
)

TEMPLATE_COLUMNS = (
    ColumnDefinition(
        id="title", header="Title", hideable=False, filterable=True,
        sort_field="title", filter_field="title_lowercase",
    ),
    ColumnDefinition(id="category", header="Category", accessor="category.name", sort_field="categoryId"),
    ColumnDefinition(id="price", header="Price", kind=ColumnKind.NUMBER, sort_field="price"),
    ColumnDefinition(id="author", header="Author", sort_field="author"),
    ColumnDefinition(id="tech_stack", header="Tech stack", kind=ColumnKind.LIST, sortable=False),
    _created_at(),
)

ORDER_COLUMNS = (
    ColumnDefinition(
        id="order_id", header="Order", hideable=False, filterable=True,
        sort_field="orderId", filter_field="orderId",
    ),
    ColumnDefinition(
        id="user_email", header="Customer", filterable=True,
        sort_field="userEmail", filter_field="userEmail",
    ),
    ColumnDefinition(
        id="total_amount", header="Total", kind=ColumnKind.NUMBER, cell=_money, sort_field="totalAmount",
    ),
    ColumnDefinition(
        id="status", header="Status", filterable=True, sort_field="status", filter_field="status",
    ),
    ColumnDefinition(id="payment_gateway", header="Gateway", sortable=False),
    _created_at(),
)

USER_COLUMNS = (
    ColumnDefinition(
        id="email", header="Email", hideable=False, filterable=True,
        sort_field="email", filter_field="email",
    ),
    ColumnDefinition(id="display_name", header="Name", sort_field="displayName"),
    ColumnDefinition(id="role", header="Role", filterable=True, sort_field="role", filter_field="role"),
    ColumnDefinition(id="order_count", header="Orders", kind=ColumnKind.NUMBER, sortable=False),
    ColumnDefinition(
        id="total_spent", header="Total spent", kind=ColumnKind.NUMBER, cell=_money, sortable=False,
    ),
    _created_at(),
)

ERP_ITEM_COLUMNS = (
    ColumnDefinition(id="title", header="Item", hideable=False, filterable=True),
    ColumnDefinition(id="category", header="Item group", accessor="category.name", filterable=True),
    ColumnDefinition(id="status", header="Status", filterable=True),
    ColumnDefinition(id="price", header="Rate", accessor="pricing.fixed_price", kind=ColumnKind.NUMBER),
    ColumnDefinition(id="tags", header="Tags", kind=ColumnKind.LIST, filterable=True, sortable=False),
    _created_at(),
)

SALES_INVOICE_COLUMNS = (
    ColumnDefinition(id="order_id", header="Invoice", hideable=False, filterable=True),
    ColumnDefinition(id="user_email", header="Customer", filterable=True),
    ColumnDefinition(id="total_amount", header="Grand total", kind=ColumnKind.NUMBER, cell=_money),
    ColumnDefinition(id="status", header="Status", filterable=True),
    ColumnDefinition(id="created_at", header="Posted", kind=ColumnKind.DATE),
)

CUSTOMER_COLUMNS = (
    ColumnDefinition(id="customer_name", header="Customer", hideable=False, filterable=True),
    ColumnDefinition(id="customer_type", header="Type", filterable=True),
    ColumnDefinition(id="customer_primary_email", header="Email", filterable=True),
    _created_at(),
)


# ── Registry ──


def _firestore_table(
    name: str,
    title: str,
    db_provider: Callable[[], Any],
    collection: str,
    transform: Callable[[str, dict[str, Any]], Any],
    columns: tuple[ColumnDefinition, ...],
    exact_filter_columns: tuple[str, ...] = (),
    wrap: Callable[[PageSource], PageSource] | None = None,
) -> TableDefinition:
    def source_factory() -> PageSource:
        source = FirestorePageSource(
            db_provider, collection, transform, columns,
            exact_filter_columns=exact_filter_columns,
        )
        return wrap(source) if wrap else source

    return TableDefinition(
        name=name,
        title=title,
        backend="firestore",
        mode=QueryMode.SERVER,
        columns=columns,
        source_factory=source_factory,
        default_state=NEWEST_FIRST,
    )


def _erpnext_table(
    name: str,
    title: str,
    loader_factory: Callable[[], Any],
    columns: tuple[ColumnDefinition, ...],
) -> TableDefinition:
    return TableDefinition(
        name=name,
        title=title,
        backend="erpnext",
        mode=QueryMode.CLIENT,
        columns=columns,
        source_factory=lambda: ClientFilteredPageSource(loader_factory(), columns, source_name=name),
        default_state=NEWEST_FIRST,
    )


def build_table_registry(
    settings: Settings,
    db_provider: Callable[[], Any],
    erp_client: ERPNextClient,
) -> TableRegistry:
    """Every table the back-office offers, keyed by URL-safe name."""
    cap = settings.client_fetch_cap
    return TableRegistry([
        _firestore_table(
            "services", "Services", db_provider, SERVICES, service_from_firestore,
            SERVICE_COLUMNS, exact_filter_columns=("status",),
        ),
        _firestore_table(
            "templates", "Templates", db_provider, TEMPLATES, template_from_firestore, TEMPLATE_COLUMNS,
        ),
        _firestore_table(
            "orders", "Orders", db_provider, ORDERS, order_from_firestore,
            ORDER_COLUMNS, exact_filter_columns=("order_id", "status"),
        ),
        _firestore_table(
            "users", "Users", db_provider, USERS, user_profile_from_firestore,
            USER_COLUMNS, exact_filter_columns=("role",),
            wrap=lambda users: CustomerStatsPageSource(users, FirestoreOrderRepository(db_provider)),
        ),
        _erpnext_table("erp-items", "ERPNext items", lambda: item_loader(erp_client, cap), ERP_ITEM_COLUMNS),
        _erpnext_table(
            "erp-sales-invoices", "Sales invoices",
            lambda: sales_invoice_loader(erp_client, cap), SALES_INVOICE_COLUMNS,
        ),
        _erpnext_table(
            "erp-customers", "Customers", lambda: customer_loader(erp_client, cap), CUSTOMER_COLUMNS,
        ),
    ])
