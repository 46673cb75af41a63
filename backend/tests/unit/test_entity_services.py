"""Unit tests for the template, service, order and ERPNext application services."""

import dataclasses

import pytest

from storefront_admin.application.interfaces import (
    CustomerRepository,
    ErpItemInput,
    ErpItemRepository,
    NewCustomer,
    OrderRepository,
    SalesInvoiceRepository,
    ServiceRepository,
    TemplateRepository,
)
from storefront_admin.application.schemas import (
    CustomerCreate,
    ErpItemWrite,
    OrderStatusUpdate,
    TemplateCreate,
    TemplateUpdate,
)
from storefront_admin.application.services import (
    CustomerService,
    ErpItemService,
    OrderService,
    SalesInvoiceService,
    ServiceCatalogService,
    TemplateService,
)
from storefront_admin.domain.catalog import SERVICE_CATEGORIES, TEMPLATE_CATEGORIES
from storefront_admin.domain.entities import (
    Customer,
    Order,
    Service,
    SessionCredentials,
    Template,
)
from storefront_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError


# ── Helpers ──


class FakeTemplateRepository(TemplateRepository):
    def __init__(self):
        self.templates: dict[str, Template] = {}
        self._next_id = 1

    async def get_by_id(self, template_id: str) -> Template | None:
        return self.templates.get(template_id)

    async def create(self, template: Template) -> Template:
        created = dataclasses.replace(template, id=f"t{self._next_id}")
        self._next_id += 1
        self.templates[created.id] = created
        return created

    async def update(self, template: Template) -> Template:
        self.templates[template.id] = template
        return template

    async def delete(self, template_id: str) -> bool:
        return self.templates.pop(template_id, None) is not None


class FakeServiceRepository(ServiceRepository):
    def __init__(self, services: list[Service]):
        self.services = {s.id: s for s in services}

    async def get_by_id(self, service_id: str) -> Service | None:
        return self.services.get(service_id)

    async def get_by_slug(self, slug: str) -> Service | None:
        return next((s for s in self.services.values() if s.slug == slug), None)


class FakeOrderRepository(OrderRepository):
    def __init__(self, orders: list[Order]):
        self.orders = {o.id: o for o in orders}

    async def get_by_order_id(self, order_id: str) -> Order | None:
        return next((o for o in self.orders.values() if o.order_id == order_id), None)

    async def get_by_xendit_invoice_id(self, invoice_id: str) -> Order | None:
        return next((o for o in self.orders.values() if o.xendit_invoice_id == invoice_id), None)

    async def list_for_user(self, user_id: str) -> list[Order]:
        orders = [o for o in self.orders.values() if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    async def update_status(self, doc_id, status, xendit_payment_status=None) -> Order | None:
        order = self.orders.get(doc_id)
        if order is None:
            return None
        changes = {"status": status}
        if xendit_payment_status is not None:
            changes["xendit_payment_status"] = xendit_payment_status
        self.orders[doc_id] = dataclasses.replace(order, **changes)
        return self.orders[doc_id]


class FakeErpItemRepository(ErpItemRepository):
    def __init__(self):
        self.items: dict[str, ErpItemInput] = {}
        self.credentials_seen: list[SessionCredentials | None] = []

    def _service(self, name: str, item: ErpItemInput) -> Service:
        return Service(id=name, title=item.title, category=SERVICE_CATEGORIES[0], status=item.status)

    async def get_by_name(self, name, credentials=None):
        self.credentials_seen.append(credentials)
        item = self.items.get(name)
        return self._service(name, item) if item else None

    async def create(self, item, credentials=None):
        self.credentials_seen.append(credentials)
        name = item.title.lower().replace(" ", "-")
        self.items[name] = item
        return self._service(name, item)

    async def update(self, name, item, credentials=None):
        self.credentials_seen.append(credentials)
        if name not in self.items:
            return None
        self.items[name] = item
        return self._service(name, item)

    async def delete(self, name, credentials=None):
        self.credentials_seen.append(credentials)
        return self.items.pop(name, None) is not None


class FakeCustomerRepository(CustomerRepository):
    def __init__(self, existing: list[Customer] | None = None):
        self.customers = list(existing or [])
        self.created: list[NewCustomer] = []

    async def find_by_email(self, email, credentials=None):
        return next((c for c in self.customers if c.customer_primary_email == email), None)

    async def create(self, customer, credentials=None):
        self.created.append(customer)
        created = Customer(
            id=customer.customer_name,
            customer_name=customer.customer_name,
            customer_type=customer.customer_type,
            customer_primary_email=customer.customer_primary_email,
        )
        self.customers.append(created)
        return created


class FakeSalesInvoiceRepository(SalesInvoiceRepository):
    def __init__(self, invoices: list[Order]):
        self.invoices = {o.id: o for o in invoices}
        self.credentials_seen: list[SessionCredentials | None] = []

    async def get_by_name(self, name, credentials=None):
        self.credentials_seen.append(credentials)
        return self.invoices.get(name)


# ── TemplateService ──


@pytest.mark.asyncio
async def test_create_template_resolves_category():
    service = TemplateService(FakeTemplateRepository())

    template = await service.create_template(TemplateCreate(title="Shop Kit", category_id="2", price=49))

    assert template.id == "t1"
    assert template.category.name == "E-commerce"
    assert template.price == 49


@pytest.mark.asyncio
async def test_create_template_with_unknown_category_falls_back():
    service = TemplateService(FakeTemplateRepository())
    template = await service.create_template(TemplateCreate(title="X", category_id="99"))
    assert template.category == TEMPLATE_CATEGORIES[0]


@pytest.mark.asyncio
async def test_update_template_changes_only_given_fields():
    repo = FakeTemplateRepository()
    service = TemplateService(repo)
    created = await service.create_template(TemplateCreate(title="Old", author="ann", price=10))

    updated = await service.update_template(created.id, TemplateUpdate(title="New", category_id="6"))

    assert updated.title == "New"
    assert updated.author == "ann"
    assert updated.price == 10
    assert updated.category.slug == "saas"


@pytest.mark.asyncio
async def test_missing_template_raises_not_found():
    service = TemplateService(FakeTemplateRepository())
    with pytest.raises(EntityNotFoundError):
        await service.get_template("nope")
    with pytest.raises(EntityNotFoundError):
        await service.update_template("nope", TemplateUpdate(title="x"))
    with pytest.raises(EntityNotFoundError):
        await service.delete_template("nope")


@pytest.mark.asyncio
async def test_delete_template():
    repo = FakeTemplateRepository()
    service = TemplateService(repo)
    created = await service.create_template(TemplateCreate(title="Gone"))

    assert await service.delete_template(created.id) is True
    assert repo.templates == {}


# ── ServiceCatalogService ──


@pytest.mark.asyncio
async def test_get_service_by_id_and_slug():
    web = Service(id="s1", title="Web", category=SERVICE_CATEGORIES[0], slug="web")
    service = ServiceCatalogService(FakeServiceRepository([web]))

    assert (await service.get_service("s1")).title == "Web"
    assert (await service.get_service_by_slug("web")).id == "s1"
    with pytest.raises(EntityNotFoundError):
        await service.get_service_by_slug("mobile")


# ── OrderService ──


@pytest.mark.asyncio
async def test_order_lookups():
    orders = [
        Order(id="d1", order_id="ORD-1", user_id="u1", xendit_invoice_id="inv-1", created_at="2024-01-01T00:00:00Z"),
        Order(id="d2", order_id="ORD-2", user_id="u1", created_at="2024-02-01T00:00:00Z"),
        Order(id="d3", order_id="ORD-3", user_id="u2"),
    ]
    service = OrderService(FakeOrderRepository(orders))

    assert (await service.get_order("ORD-2")).id == "d2"
    assert (await service.get_order_by_invoice("inv-1")).order_id == "ORD-1"
    assert [o.order_id for o in await service.list_user_orders("u1")] == ["ORD-2", "ORD-1"]
    with pytest.raises(EntityNotFoundError):
        await service.get_order("ORD-404")


@pytest.mark.asyncio
async def test_update_order_status():
    service = OrderService(FakeOrderRepository([Order(id="d1", order_id="ORD-1")]))

    order = await service.update_status("d1", OrderStatusUpdate(status="paid", xendit_payment_status="PAID"))

    assert order.status == "paid"
    assert order.xendit_payment_status == "PAID"
    with pytest.raises(EntityNotFoundError):
        await service.update_status("missing", OrderStatusUpdate(status="paid"))


# ── ErpItemService ──


@pytest.mark.asyncio
async def test_item_service_passes_credentials_through():
    repo = FakeErpItemRepository()
    service = ErpItemService(repo)
    creds = SessionCredentials(sid="abc")

    created = await service.create_item(ErpItemWrite(title="Web App", item_group="Website Development"), creds)
    fetched = await service.get_item(created.id, creds)

    assert fetched.title == "Web App"
    assert repo.credentials_seen == [creds, creds]


@pytest.mark.asyncio
async def test_item_service_not_found():
    service = ErpItemService(FakeErpItemRepository())
    with pytest.raises(EntityNotFoundError):
        await service.get_item("ghost")
    with pytest.raises(EntityNotFoundError):
        await service.update_item("ghost", ErpItemWrite(title="x", item_group="g"))
    with pytest.raises(EntityNotFoundError):
        await service.delete_item("ghost")


# ── SalesInvoiceService ──


@pytest.mark.asyncio
async def test_sales_invoice_lookup():
    repo = FakeSalesInvoiceRepository([Order(id="ACC-SINV-0001", order_id="ACC-SINV-0001", status="paid")])
    service = SalesInvoiceService(repo)
    creds = SessionCredentials(sid="abc")

    invoice = await service.get_invoice("ACC-SINV-0001", creds)

    assert invoice.status == "paid"
    assert repo.credentials_seen == [creds]
    with pytest.raises(EntityNotFoundError):
        await service.get_invoice("ACC-SINV-9999")


# ── CustomerService ──


@pytest.mark.asyncio
async def test_create_customer_strips_fields():
    repo = FakeCustomerRepository()
    service = CustomerService(repo)

    customer = await service.create_customer(
        CustomerCreate(customer_name="  Acme  ", customer_type="Company", customer_primary_email="a@acme.io")
    )

    assert customer.customer_name == "Acme"
    assert repo.created[0].customer_primary_email == "a@acme.io"


@pytest.mark.asyncio
async def test_create_customer_rejects_duplicate_email():
    existing = Customer(id="C1", customer_name="Acme", customer_primary_email="a@acme.io")
    repo = FakeCustomerRepository([existing])
    service = CustomerService(repo)

    with pytest.raises(DuplicateEntityError) as exc_info:
        await service.create_customer(CustomerCreate(customer_name="Acme 2", customer_primary_email="a@acme.io"))

    assert exc_info.value.field == "customer_primary_email"
    assert repo.created == []


@pytest.mark.asyncio
async def test_create_customer_without_email_skips_lookup():
    repo = FakeCustomerRepository([Customer(id="C1", customer_name="Blank")])
    customer = await CustomerService(repo).create_customer(CustomerCreate(customer_name="Walk-in"))
    assert customer.customer_primary_email == ""
