"""ERPNext resource → domain entity transformers (and the reverse for writes)."""

import logging
from typing import Any

from storefront_admin.application.interfaces import ErpItemInput, NewCustomer
from storefront_admin.domain.catalog import PLACEHOLDER_IMAGE_URL, SERVICE_CATEGORIES, slugify
from storefront_admin.domain.entities import (
    Category,
    Customer,
    Order,
    PricingDetails,
    PurchasedItem,
    Service,
)
from storefront_admin.domain.coercion import (
    as_bool,
    as_list,
    as_mapping,
    as_number,
    as_optional_text,
    as_str_list,
    as_text,
    to_iso_timestamp,
    to_optional_iso_timestamp,
)

logger = logging.getLogger(__name__)

DEFAULT_CUSTOMER_GROUP = "All Customer Groups"
DEFAULT_TERRITORY = "All Territories"


def _item_group_category(item_group: Any) -> Category:
    """ERPNext item groups double as service categories."""
    name = as_text(item_group).strip()
    if not name:
        return SERVICE_CATEGORIES[0]
    slug = slugify(name)
    for category in SERVICE_CATEGORIES:
        if category.slug == slug or category.name == name:
            return category
    return Category(id=name, name=name, slug=slug)


def _absolute_image_url(image: Any, base_url: str) -> str:
    path = as_text(image).strip()
    if not path:
        return PLACEHOLDER_IMAGE_URL
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_url}{path}"


def _split_tags(tags: Any) -> list[str]:
    if isinstance(tags, str):
        return [tag.strip() for tag in tags.split(",") if tag.strip()]
    return as_str_list(tags)


def service_from_erp_item(item: dict[str, Any] | None, *, base_url: str = "") -> Service:
    """Map an ERPNext ``Item`` resource to a Service.

    Only the fixed-price model exists in ERPNext; ``standard_rate`` becomes
    that price. Relative image paths are resolved against ``base_url``.
    """
    item = as_mapping(item)
    name = as_text(item.get("name"))
    title = as_text(item.get("item_name")) or name
    return Service(
        id=name,
        slug=as_text(item.get("item_code")) or name,
        title=title,
        title_lowercase=title.lower(),
        short_description=as_text(item.get("description")),
        long_description=as_text(item.get("website_description")),
        category=_item_group_category(item.get("item_group")),
        pricing=PricingDetails(
            is_fixed_price_active=True,
            fixed_price=as_number(item.get("standard_rate")),
        ),
        tags=_split_tags(item.get("tags")),
        image_url=_absolute_image_url(item.get("image"), base_url),
        status="inactive" if as_bool(item.get("disabled")) else "active",
        service_url=as_text(item.get("service_url")) or "#",
        created_at=to_iso_timestamp(item.get("creation"), field_name=f"Item/{name}.creation"),
        updated_at=to_optional_iso_timestamp(item.get("modified"), field_name=f"Item/{name}.modified"),
    )


def erp_item_payload(item: ErpItemInput) -> dict[str, Any]:
    """Build the JSON body for creating or updating an ERPNext ``Item``.

    ``item_code`` is always the slugified title.
    """
    return {
        "item_code": slugify(item.title),
        "item_name": item.title,
        "item_group": item.item_group,
        "description": item.short_description,
        "website_description": item.long_description,
        "disabled": 1 if item.status == "inactive" else 0,
        "image": item.image_url,
        "is_stock_item": 0,
        "standard_rate": item.fixed_price,
        "service_url": item.service_url,
        "tags": ", ".join(item.tags),
    }


def _invoice_item(raw: Any) -> PurchasedItem:
    raw = as_mapping(raw)
    return PurchasedItem(
        id=as_text(raw.get("item_code")),
        title=as_text(raw.get("item_name")) or "N/A",
        price=as_number(raw.get("rate")),
    )


def order_from_sales_invoice(invoice: dict[str, Any] | None) -> Order:
    """Map an ERPNext ``Sales Invoice`` to an Order."""
    invoice = as_mapping(invoice)
    name = as_text(invoice.get("name"))
    status = as_text(invoice.get("status"))
    return Order(
        id=name,
        order_id=name,
        user_id=as_text(invoice.get("customer")),
        user_email=as_text(invoice.get("customer_name")) or as_text(invoice.get("customer")),
        items=[_invoice_item(item) for item in as_list(invoice.get("items"))],
        total_amount=as_number(invoice.get("grand_total")),
        currency=as_text(invoice.get("currency")) or "IDR",
        status=status.lower() or "pending",
        payment_gateway=as_text(invoice.get("custom_payment_gateway")) or "ERPNext",
        xendit_invoice_id=as_optional_text(invoice.get("xendit_invoice_id")),
        xendit_invoice_url=as_optional_text(invoice.get("xendit_invoice_url")),
        xendit_payment_status=status or None,
        created_at=to_iso_timestamp(
            invoice.get("posting_date") or invoice.get("creation"),
            field_name=f"Sales Invoice/{name}.posting_date",
        ),
        updated_at=to_optional_iso_timestamp(invoice.get("modified"), field_name=f"Sales Invoice/{name}.modified"),
    )


def customer_from_erp(record: dict[str, Any] | None) -> Customer:
    """Map an ERPNext ``Customer`` resource to a Customer."""
    record = as_mapping(record)
    name = as_text(record.get("name"))
    customer_type = as_text(record.get("customer_type"))
    if customer_type not in ("Company", "Individual"):
        if customer_type:
            logger.warning("Unknown customer_type %r on Customer/%s — using Individual", customer_type, name)
        customer_type = "Individual"
    return Customer(
        id=name,
        customer_name=as_text(record.get("customer_name")) or name,
        customer_type=customer_type,
        customer_primary_email=as_text(record.get("customer_primary_email")),
        created_at=to_iso_timestamp(record.get("creation"), field_name=f"Customer/{name}.creation"),
        updated_at=to_optional_iso_timestamp(record.get("modified"), field_name=f"Customer/{name}.modified"),
    )


def erp_customer_payload(customer: NewCustomer) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "customer_name": customer.customer_name,
        "customer_type": customer.customer_type,
        "customer_group": DEFAULT_CUSTOMER_GROUP,
        "territory": DEFAULT_TERRITORY,
    }
    if customer.customer_primary_email:
        payload["customer_primary_email"] = customer.customer_primary_email
    return payload
