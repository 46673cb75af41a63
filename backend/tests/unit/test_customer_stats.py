"""Unit tests for the per-customer order statistics on the users table."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront_admin.domain.entities import (
    ErrorKind,
    FetchFailure,
    Order,
    PageResult,
    TableState,
    UserProfile,
)
from storefront_admin.domain.exceptions import BackendRequestError
from storefront_admin.infrastructure.firestore.customer_stats import (
    CustomerStatsPageSource,
    is_paid,
)
from storefront_admin.infrastructure.firestore.page_source import FirestorePageSource
from storefront_admin.infrastructure.firestore.repositories import FirestoreOrderRepository
from storefront_admin.infrastructure.firestore.transformers import user_profile_from_firestore
from storefront_admin.infrastructure.tables import USER_COLUMNS
from tests.fakes.firestore import FakeFirestore

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ── Helpers ──


class FailingOrderRepository(FirestoreOrderRepository):
    def __init__(self, db_provider, failing_user: str):
        super().__init__(db_provider)
        self.failing_user = failing_user

    async def list_for_user(self, user_id):
        if user_id == self.failing_user:
            raise BackendRequestError("firestore", "unavailable", retryable=True)
        return await super().list_for_user(user_id)


class StaticPageSource:
    def __init__(self, outcome):
        self.outcome = outcome

    async def fetch_page(self, request, *, credentials=None):
        return self.outcome


@pytest.fixture
def db() -> FakeFirestore:
    fake = FakeFirestore()
    fake.add("users", "u1", {"email": "ann@example.com", "createdAt": EPOCH + timedelta(days=2)})
    fake.add("users", "u2", {"email": "bob@example.com", "createdAt": EPOCH + timedelta(days=1)})
    fake.add("users", "u3", {"email": "cy@example.com", "createdAt": EPOCH})
    orders = [
        ("o1", "u1", "completed", None, 100),
        ("o2", "u1", "pending", "PAID", 50),
        ("o3", "u1", "pending", None, 999),
        ("o4", "u2", "cancelled", "EXPIRED", 70),
    ]
    for i, (doc_id, user_id, status, payment, amount) in enumerate(orders):
        fake.add("orders", doc_id, {
            "orderId": doc_id.upper(),
            "userId": user_id,
            "status": status,
            "xenditPaymentStatus": payment,
            "totalAmount": amount,
            "createdAt": EPOCH + timedelta(hours=i),
        })
    return fake


def _source(db: FakeFirestore, orders=None) -> CustomerStatsPageSource:
    users = FirestorePageSource(lambda: db, "users", user_profile_from_firestore, USER_COLUMNS)
    return CustomerStatsPageSource(users, orders or FirestoreOrderRepository(lambda: db))


# ── Tests ──


def test_completed_or_paid_orders_count():
    assert is_paid(Order(id="a", status="completed"))
    assert is_paid(Order(id="b", status="pending", xendit_payment_status="PAID"))
    assert not is_paid(Order(id="c", status="pending", xendit_payment_status="PENDING"))


@pytest.mark.asyncio
async def test_rows_carry_order_count_and_total_spent(db):
    result = await _source(db).fetch_page(TableState())

    assert isinstance(result, PageResult)
    stats = {u.id: (u.order_count, u.total_spent) for u in result.data}
    assert stats == {"u1": (2, 150), "u2": (0, 0), "u3": (0, 0)}
    assert result.total_items == 3
    assert [u.id for u in result.data] == ["u1", "u2", "u3"]


@pytest.mark.asyncio
async def test_stats_render_in_number_columns(db):
    result = await _source(db).fetch_page(TableState(page_size=1))

    columns = {c.id: c for c in USER_COLUMNS}
    ann = result.data[0]
    assert columns["order_count"].render_cell(ann) == "2"
    assert columns["total_spent"].render_cell(ann) == "IDR 150"
    assert not columns["total_spent"].sortable


@pytest.mark.asyncio
async def test_unreadable_orders_leave_zeros(db):
    source = _source(db, FailingOrderRepository(lambda: db, failing_user="u1"))

    result = await source.fetch_page(TableState())

    ann = next(u for u in result.data if u.id == "u1")
    assert (ann.order_count, ann.total_spent) == (0, 0)
    assert result.total_items == 3


@pytest.mark.asyncio
async def test_failed_page_is_passed_through():
    failure = FetchFailure(error="Firestore is temporarily unavailable", kind=ErrorKind.TRANSIENT)
    source = CustomerStatsPageSource(StaticPageSource(failure), FirestoreOrderRepository(lambda: None))

    assert await source.fetch_page(TableState()) is failure


@pytest.mark.asyncio
async def test_empty_page_skips_order_lookups():
    empty = PageResult(data=[], page_count=0, total_items=0)
    db = FakeFirestore()
    source = CustomerStatsPageSource(StaticPageSource(empty), FirestoreOrderRepository(lambda: db))

    assert await source.fetch_page(TableState()) is empty
    assert db.count_calls() == 0


def test_user_profile_defaults_to_no_orders():
    user = UserProfile(id="u9")
    assert (user.order_count, user.total_spent) == (0, 0)
