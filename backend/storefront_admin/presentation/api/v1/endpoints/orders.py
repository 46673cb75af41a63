"""Order lookup and status endpoints (Firestore ``orders`` collection)."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront_admin.application.schemas import OrderResponse, OrderStatusUpdate
from storefront_admin.application.services import OrderService
from storefront_admin.domain.exceptions import (
    BackendRequestError,
    ConfigurationError,
    EntityNotFoundError,
)
from storefront_admin.infrastructure.dependencies import get_order_service
from storefront_admin.presentation.api.v1.errors import backend_http_exception

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("/by-invoice/{invoice_id}", response_model=OrderResponse)
async def get_order_by_invoice(
    invoice_id: str,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Find the order a payment-gateway invoice belongs to."""
    try:
        order = await service.get_order_by_invoice(invoice_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return OrderResponse.model_validate(order, from_attributes=True)


@router.get("/by-user/{user_id}", response_model=list[OrderResponse])
async def list_user_orders(
    user_id: str,
    service: OrderService = Depends(get_order_service),
) -> list[OrderResponse]:
    """All orders of one user, newest first."""
    try:
        orders = await service.list_user_orders(user_id)
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return [OrderResponse.model_validate(o, from_attributes=True) for o in orders]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Retrieve an order by its customer-facing order ID."""
    try:
        order = await service.get_order(order_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return OrderResponse.model_validate(order, from_attributes=True)


@router.patch("/{doc_id}/status", response_model=OrderResponse)
async def update_order_status(
    doc_id: str,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Set an order's status (and optionally the gateway payment status)."""
    try:
        order = await service.update_status(doc_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return OrderResponse.model_validate(order, from_attributes=True)
