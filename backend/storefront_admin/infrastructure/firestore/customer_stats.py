"""Users page source that adds per-customer order statistics to each row."""

import asyncio
import logging
from dataclasses import replace

from storefront_admin.application.interfaces import OrderRepository, PageSource
from storefront_admin.domain.entities import (
    Order,
    PageOutcome,
    PageRequest,
    PageResult,
    QueryMode,
    SessionCredentials,
    UserProfile,
)
from storefront_admin.domain.exceptions import BackendRequestError

logger = logging.getLogger(__name__)


def is_paid(order: Order) -> bool:
    return order.status == "completed" or order.xendit_payment_status == "PAID"


class CustomerStatsPageSource(PageSource[UserProfile]):
    """Wraps the users page source; every row on the page gets ``order_count``
    and ``total_spent`` from that user's completed or paid orders.

    Stats are per page, not sortable. A user whose orders cannot be read
    keeps zeros; the page itself still succeeds.
    """

    mode = QueryMode.SERVER

    def __init__(self, users: PageSource[UserProfile], orders: OrderRepository):
        self._users = users
        self._orders = orders

    async def fetch_page(
        self,
        request: PageRequest,
        *,
        credentials: SessionCredentials | None = None,
    ) -> PageOutcome:
        outcome = await self._users.fetch_page(request, credentials=credentials)
        if not outcome.success or not outcome.data:
            return outcome
        rows = await asyncio.gather(*(self._with_stats(user) for user in outcome.data))
        return PageResult(data=list(rows), page_count=outcome.page_count, total_items=outcome.total_items)

    async def _with_stats(self, user: UserProfile) -> UserProfile:
        try:
            orders = await self._orders.list_for_user(user.id)
        except BackendRequestError as exc:
            logger.warning("Failed to fetch orders for user %s: %s", user.id, exc)
            return user
        paid = [order for order in orders if is_paid(order)]
        return replace(
            user,
            order_count=len(paid),
            total_spent=sum(order.total_amount for order in paid),
        )
