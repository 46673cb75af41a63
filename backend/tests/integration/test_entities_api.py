"""Integration tests for template, order and ERPNext endpoints."""

import json
from datetime import datetime, timezone

import httpx
import pytest
from google.api_core.exceptions import ServiceUnavailable
from httpx import ASGITransport, AsyncClient

from storefront_admin.application.services import (
    CustomerService,
    ErpItemService,
    OrderService,
    SalesInvoiceService,
    TemplateService,
)
from storefront_admin.infrastructure.dependencies import (
    get_customer_service,
    get_erp_item_service,
    get_order_service,
    get_sales_invoice_service,
    get_template_service,
)
from storefront_admin.infrastructure.erpnext.client import ERPNextClient
from storefront_admin.infrastructure.erpnext.repositories import (
    ErpNextCustomerRepository,
    ErpNextItemRepository,
    ErpNextSalesInvoiceRepository,
)
from storefront_admin.infrastructure.firestore.repositories import (
    FirestoreOrderRepository,
    FirestoreTemplateRepository,
)
from storefront_admin.main import app
from tests.fakes.firestore import FakeFirestore

ERP_BASE = "https://erp.example.com"


# ── Helpers ──


def _erp_client(handler) -> ERPNextClient:
    return ERPNextClient(
        ERP_BASE,
        guest_api_key="gk",
        guest_api_secret="gs",
        admin_api_key="ak",
        admin_api_secret="as",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _override_erp(client: ERPNextClient) -> None:
    app.dependency_overrides[get_erp_item_service] = lambda: ErpItemService(ErpNextItemRepository(client))
    app.dependency_overrides[get_customer_service] = lambda: CustomerService(ErpNextCustomerRepository(client))
    app.dependency_overrides[get_sales_invoice_service] = lambda: SalesInvoiceService(
        ErpNextSalesInvoiceRepository(client)
    )


@pytest.fixture
def db() -> FakeFirestore:
    fake = FakeFirestore()
    fake.add("orders", "doc1", {
        "orderId": "ORD-1001",
        "userId": "u1",
        "userEmail": "ann@example.com",
        "items": [{"id": "tpl1", "title": "Shop Kit", "price": 49}],
        "totalAmount": 49,
        "status": "pending",
        "xenditInvoiceId": "inv-1",
        "createdAt": datetime(2024, 5, 1, tzinfo=timezone.utc),
    })
    return fake


@pytest.fixture
def client(db):
    app.dependency_overrides[get_template_service] = lambda: TemplateService(FirestoreTemplateRepository(lambda: db))
    app.dependency_overrides[get_order_service] = lambda: OrderService(FirestoreOrderRepository(lambda: db))
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


# ── Templates ──


@pytest.mark.asyncio
async def test_template_crud(client, db):
    async with client:
        created = await client.post("/api/v1/templates", json={"title": "Shop Kit", "category_id": "2", "price": 49})
        assert created.status_code == 201
        template_id = created.json()["id"]
        assert created.json()["category"]["slug"] == "ecommerce"

        updated = await client.put(f"/api/v1/templates/{template_id}", json={"price": 59})
        assert updated.json()["price"] == 59
        assert updated.json()["title"] == "Shop Kit"

        deleted = await client.delete(f"/api/v1/templates/{template_id}")
        assert deleted.status_code == 204

        missing = await client.get(f"/api/v1/templates/{template_id}")
        assert missing.status_code == 404


@pytest.mark.asyncio
async def test_template_validation(client):
    async with client:
        response = await client.post("/api/v1/templates", json={"title": "", "price": -1})
    assert response.status_code == 422


# ── Orders ──


@pytest.mark.asyncio
async def test_order_lookups_and_status(client):
    async with client:
        by_ref = await client.get("/api/v1/orders/ORD-1001")
        by_invoice = await client.get("/api/v1/orders/by-invoice/inv-1")
        by_user = await client.get("/api/v1/orders/by-user/u1")
        patched = await client.patch("/api/v1/orders/doc1/status", json={"status": "paid"})
        missing = await client.patch("/api/v1/orders/nope/status", json={"status": "paid"})

    assert by_ref.json()["items"][0]["title"] == "Shop Kit"
    assert by_invoice.json()["id"] == "doc1"
    assert [o["order_id"] for o in by_user.json()] == ["ORD-1001"]
    assert patched.json()["status"] == "paid"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_firestore_outage_maps_to_504(client, db):
    db.fail_with = ServiceUnavailable("down")
    async with client:
        response = await client.get("/api/v1/orders/ORD-1001")
    assert response.status_code == 504


# ── ERPNext ──


@pytest.mark.asyncio
async def test_duplicate_customer_email_is_409(client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        return httpx.Response(200, json={"data": [{"name": "CUST-1", "customer_primary_email": "a@acme.io"}]})

    _override_erp(_erp_client(handler))
    async with client:
        response = await client.post(
            "/api/v1/erp/customers",
            json={"customer_name": "Acme", "customer_primary_email": "a@acme.io"},
        )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_customer(client):
    posted: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"data": []})
        posted.append(json.loads(request.content))
        return httpx.Response(200, json={"data": {"name": "Acme", "customer_name": "Acme", "customer_type": "Company"}})

    _override_erp(_erp_client(handler))
    async with client:
        response = await client.post(
            "/api/v1/erp/customers",
            json={"customer_name": "Acme", "customer_type": "Company", "customer_primary_email": "a@acme.io"},
        )

    assert response.status_code == 201
    assert response.json()["id"] == "Acme"
    assert posted[0]["customer_name"] == "Acme"


@pytest.mark.asyncio
async def test_item_not_found_and_upstream_errors(client):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/missing"):
            return httpx.Response(404, json={})
        return httpx.Response(417, json={"exception": "frappe.exceptions.ValidationError: Item Group is mandatory"})

    _override_erp(_erp_client(handler))
    async with client:
        missing = await client.get("/api/v1/erp/items/missing")
        rejected = await client.post("/api/v1/erp/items", json={"title": "X", "item_group": "Nope"})

    assert missing.status_code == 404
    assert rejected.status_code == 502
    assert rejected.json()["detail"] == "Item Group is mandatory"


@pytest.mark.asyncio
async def test_get_sales_invoice(client):
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.raw_path.decode())
        if request.url.path.endswith("/ACC-SINV-0001"):
            return httpx.Response(200, json={"data": {
                "name": "ACC-SINV-0001",
                "customer": "Acme",
                "posting_date": "2024-05-01",
                "grand_total": 1500000,
                "currency": "IDR",
                "status": "Paid",
                "items": [{"item_code": "web-dev", "item_name": "Web Development", "rate": 1500000}],
            }})
        if request.url.path.endswith("/ACC-SINV-0002"):
            return httpx.Response(503, json={"message": "Service Unavailable"})
        return httpx.Response(404, json={})

    _override_erp(_erp_client(handler))
    async with client:
        found = await client.get("/api/v1/erp/sales-invoices/ACC-SINV-0001", headers={"X-ERPNext-Session": "sid-1"})
        missing = await client.get("/api/v1/erp/sales-invoices/ACC-SINV-9999")
        outage = await client.get("/api/v1/erp/sales-invoices/ACC-SINV-0002")

    assert found.status_code == 200
    invoice = found.json()
    assert invoice["order_id"] == "ACC-SINV-0001"
    assert invoice["status"] == "paid"
    assert invoice["total_amount"] == 1500000
    assert invoice["items"] == [{"id": "web-dev", "title": "Web Development", "price": 1500000}]
    assert paths[0].endswith("/api/resource/Sales%20Invoice/ACC-SINV-0001")
    assert missing.status_code == 404
    assert outage.status_code == 504


@pytest.mark.asyncio
async def test_unconfigured_erpnext_is_503(client):
    _override_erp(ERPNextClient(""))
    async with client:
        response = await client.get("/api/v1/erp/items/web-dev")
    assert response.status_code == 503
