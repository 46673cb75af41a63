"""ERPNext item, sales invoice and customer endpoints.

The caller's ERPNext session (``sid`` cookie or ``X-ERPNext-Session``
header) is forwarded on every call.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront_admin.application.schemas import (
    CustomerCreate,
    CustomerResponse,
    ErpItemWrite,
    OrderResponse,
    ServiceResponse,
)
from storefront_admin.application.services import (
    CustomerService,
    ErpItemService,
    SalesInvoiceService,
)
from storefront_admin.domain.entities import SessionCredentials
from storefront_admin.domain.exceptions import (
    BackendRequestError,
    ConfigurationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from storefront_admin.infrastructure.dependencies import (
    get_customer_service,
    get_erp_item_service,
    get_sales_invoice_service,
    get_session_credentials,
)
from storefront_admin.presentation.api.v1.errors import backend_http_exception

router = APIRouter(prefix="/erp", tags=["ERPNext"])


# ── Items ──


@router.get("/items/{name}", response_model=ServiceResponse)
async def get_item(
    name: str,
    service: ErpItemService = Depends(get_erp_item_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> ServiceResponse:
    try:
        item = await service.get_item(name, credentials)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return ServiceResponse.model_validate(item, from_attributes=True)


@router.post("/items", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: ErpItemWrite,
    service: ErpItemService = Depends(get_erp_item_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> ServiceResponse:
    """Create a service as an ERPNext Item; the item code is the slugified title."""
    try:
        item = await service.create_item(data, credentials)
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return ServiceResponse.model_validate(item, from_attributes=True)


@router.put("/items/{name}", response_model=ServiceResponse)
async def update_item(
    name: str,
    data: ErpItemWrite,
    service: ErpItemService = Depends(get_erp_item_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> ServiceResponse:
    try:
        item = await service.update_item(name, data, credentials)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return ServiceResponse.model_validate(item, from_attributes=True)


@router.delete("/items/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    name: str,
    service: ErpItemService = Depends(get_erp_item_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> None:
    try:
        await service.delete_item(name, credentials)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e


# ── Sales invoices ──


@router.get("/sales-invoices/{name}", response_model=OrderResponse)
async def get_sales_invoice(
    name: str,
    service: SalesInvoiceService = Depends(get_sales_invoice_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> OrderResponse:
    """One Sales Invoice, mapped to the same shape as a Firestore order."""
    try:
        invoice = await service.get_invoice(name, credentials)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return OrderResponse.model_validate(invoice, from_attributes=True)


# ── Customers ──


@router.post("/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> CustomerResponse:
    """Create an ERPNext customer; a primary email can only be used once."""
    try:
        customer = await service.create_customer(data, credentials)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return CustomerResponse.model_validate(customer, from_attributes=True)
