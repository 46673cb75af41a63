"""Application service for order lookups and status changes."""

import logging

from storefront_admin.application.interfaces import OrderRepository
from storefront_admin.application.schemas import OrderStatusUpdate
from storefront_admin.domain.entities import Order
from storefront_admin.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, repository: OrderRepository):
        self._repository = repository

    async def get_order(self, order_id: str) -> Order:
        """Look up an order by its customer-facing reference."""
        order = await self._repository.get_by_order_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        return order

    async def get_order_by_invoice(self, invoice_id: str) -> Order:
        order = await self._repository.get_by_xendit_invoice_id(invoice_id)
        if order is None:
            raise EntityNotFoundError("Order", invoice_id)
        return order

    async def list_user_orders(self, user_id: str) -> list[Order]:
        return await self._repository.list_for_user(user_id)

    async def update_status(self, doc_id: str, data: OrderStatusUpdate) -> Order:
        order = await self._repository.update_status(
            doc_id, data.status, xendit_payment_status=data.xendit_payment_status,
        )
        if order is None:
            raise EntityNotFoundError("Order", doc_id)
        return order
