"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Cookie, Depends, Header

from storefront_admin.application.services import (
    CustomerService,
    ErpItemService,
    OrderService,
    SalesInvoiceService,
    ServiceCatalogService,
    TableRegistry,
    TableService,
    TableSessionManager,
    TemplateService,
)
from storefront_admin.config import get_settings
from storefront_admin.domain.entities import SessionCredentials
from storefront_admin.infrastructure.erpnext.client import ERPNextClient
from storefront_admin.infrastructure.erpnext.repositories import (
    ErpNextCustomerRepository,
    ErpNextItemRepository,
    ErpNextSalesInvoiceRepository,
)
from storefront_admin.infrastructure.firestore.client import get_firestore_client
from storefront_admin.infrastructure.firestore.repositories import (
    FirestoreOrderRepository,
    FirestoreServiceRepository,
    FirestoreTemplateRepository,
)
from storefront_admin.infrastructure.tables import build_table_registry


# ── Singletons ──


@lru_cache
def get_erpnext_client() -> ERPNextClient:
    settings = get_settings()
    return ERPNextClient(
        settings.erpnext_api_url,
        guest_api_key=settings.erpnext_guest_api_key,
        guest_api_secret=settings.erpnext_guest_api_secret,
        admin_api_key=settings.erpnext_admin_api_key,
        admin_api_secret=settings.erpnext_admin_api_secret,
        timeout=settings.request_timeout_seconds,
    )


@lru_cache
def get_table_registry() -> TableRegistry:
    # get_firestore_client is handed over uncalled and resolved per query.
    return build_table_registry(get_settings(), get_firestore_client, get_erpnext_client())


@lru_cache
def get_table_session_manager() -> TableSessionManager:
    return TableSessionManager()


# ── Request-scoped ──


async def get_session_credentials(
    sid: str | None = Cookie(None),
    x_erpnext_session: str | None = Header(None),
) -> SessionCredentials:
    """ERPNext session id from the ``sid`` cookie or the ``X-ERPNext-Session`` header."""
    session_id = (sid or x_erpnext_session or "").strip()
    return SessionCredentials(sid=session_id or None)


async def get_table_service(
    registry: TableRegistry = Depends(get_table_registry),
    sessions: TableSessionManager = Depends(get_table_session_manager),
) -> AsyncGenerator[TableService, None]:
    """Provides a TableService bound to the shared registry and session store."""
    settings = get_settings()
    yield TableService(
        registry,
        sessions,
        timeout=settings.request_timeout_seconds,
        debounce_seconds=settings.filter_debounce_seconds,
        page_size_options=settings.page_size_options,
        default_page_size=settings.default_page_size,
    )


async def get_template_service() -> AsyncGenerator[TemplateService, None]:
    yield TemplateService(FirestoreTemplateRepository(get_firestore_client))


async def get_service_catalog_service() -> AsyncGenerator[ServiceCatalogService, None]:
    yield ServiceCatalogService(FirestoreServiceRepository(get_firestore_client))


async def get_order_service() -> AsyncGenerator[OrderService, None]:
    yield OrderService(FirestoreOrderRepository(get_firestore_client))


async def get_erp_item_service(
    client: ERPNextClient = Depends(get_erpnext_client),
) -> AsyncGenerator[ErpItemService, None]:
    yield ErpItemService(ErpNextItemRepository(client))


async def get_sales_invoice_service(
    client: ERPNextClient = Depends(get_erpnext_client),
) -> AsyncGenerator[SalesInvoiceService, None]:
    yield SalesInvoiceService(ErpNextSalesInvoiceRepository(client))


async def get_customer_service(
    client: ERPNextClient = Depends(get_erpnext_client),
) -> AsyncGenerator[CustomerService, None]:
    """Provides a CustomerService backed by the ERPNext Customer doctype."""
    yield CustomerService(ErpNextCustomerRepository(client))
