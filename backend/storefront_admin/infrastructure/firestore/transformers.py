"""Firestore document → domain entity transformers.

The only place where schema-loose Firestore data is turned into typed
entities. Every function is pure and total: missing or malformed fields fall
back to documented defaults instead of raising.
"""

import logging
import uuid
from typing import Any

from storefront_admin.domain.catalog import (
    DEFAULT_JOURNEY_STAGES,
    PLACEHOLDER_IMAGE_URL,
    SERVICE_CATEGORIES,
    TEMPLATE_CATEGORIES,
    resolve_category,
)
from storefront_admin.domain.coercion import (
    as_bool,
    as_list,
    as_mapping,
    as_number,
    as_optional_number,
    as_optional_text,
    as_str_list,
    as_text,
    to_iso_timestamp,
    to_optional_iso_timestamp,
)
from storefront_admin.domain.entities import (
    FaqItem,
    JourneyStage,
    Order,
    PackageFeature,
    PricingDetails,
    PurchasedItem,
    Service,
    ServicePackage,
    Template,
    UserProfile,
)

logger = logging.getLogger(__name__)


def _generated_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:6]}"


def snapshot_parts(snapshot: Any) -> tuple[str, dict[str, Any]]:
    """Split a Firestore DocumentSnapshot into (id, data) without trusting its shape."""
    doc_id = as_text(getattr(snapshot, "id", ""))
    to_dict = getattr(snapshot, "to_dict", None)
    data = to_dict() if callable(to_dict) else None
    return doc_id, as_mapping(data)


# ── Services ─────────────────────────────────────────────────────────


def _package_feature(raw: Any) -> PackageFeature:
    raw = as_mapping(raw)
    return PackageFeature(
        id=as_text(raw.get("id")) or _generated_id("feat"),
        text=as_text(raw.get("text")),
        is_included=as_bool(raw.get("isIncluded"), default=True) if "isIncluded" in raw else True,
    )


def _service_package(raw: Any) -> ServicePackage:
    raw = as_mapping(raw)
    return ServicePackage(
        id=as_text(raw.get("id")) or _generated_id("pkg"),
        name=as_text(raw.get("name")) or "Unnamed Package",
        description=as_text(raw.get("description")),
        price_monthly=as_number(raw.get("priceMonthly")),
        original_price_monthly=as_optional_number(raw.get("originalPriceMonthly")),
        annual_price_calc_method=as_text(raw.get("annualPriceCalcMethod")) or "percentage",
        annual_discount_percentage=as_number(raw.get("annualDiscountPercentage")),
        discounted_monthly_price=as_number(raw.get("discountedMonthlyPrice")),
        renewal_info=as_text(raw.get("renewalInfo")),
        features=[_package_feature(f) for f in as_list(raw.get("features"))],
        is_popular=as_bool(raw.get("isPopular")),
        cta=as_text(raw.get("cta")) or "Choose Plan",
    )


def _pricing(raw: Any) -> PricingDetails:
    raw = as_mapping(raw)
    fixed = as_mapping(raw.get("fixedPriceDetails"))
    subscription = as_mapping(raw.get("subscriptionDetails"))
    custom = as_mapping(raw.get("customQuoteDetails"))
    return PricingDetails(
        is_fixed_price_active=as_bool(raw.get("isFixedPriceActive")),
        fixed_price=as_number(fixed.get("price")),
        is_subscription_active=as_bool(raw.get("isSubscriptionActive")),
        packages=[_service_package(p) for p in as_list(subscription.get("packages"))],
        is_custom_quote_active=as_bool(raw.get("isCustomQuoteActive")),
        custom_quote_description=as_text(custom.get("description")),
    )


def _journey_stage(raw: Any) -> JourneyStage:
    raw = as_mapping(raw)
    details = raw.get("details")
    if isinstance(details, list):
        details = "\n- ".join(as_text(d) for d in details)
    return JourneyStage(
        id=as_text(raw.get("id")) or _generated_id("stage"),
        title=as_text(raw.get("title")) or "Untitled Stage",
        details=as_text(details),
        placeholder=as_text(raw.get("placeholder")),
        image_url=as_optional_text(raw.get("imageUrl")),
        image_ai_hint=as_optional_text(raw.get("imageAiHint")),
    )


def _journey_stages(raw: Any) -> list[JourneyStage]:
    stages = as_list(raw)
    if not stages:
        logger.debug("No customer journey stages — using defaults")
        return list(DEFAULT_JOURNEY_STAGES)
    return [_journey_stage(stage) for stage in stages]


def _faq(raw: Any) -> list[FaqItem]:
    items = []
    for entry in as_list(raw):
        entry = as_mapping(entry)
        items.append(FaqItem(
            question=as_text(entry.get("question")),
            answer=as_text(entry.get("answer")),
        ))
    return items


def service_from_firestore(doc_id: str, data: dict[str, Any] | None) -> Service:
    """Map a ``services`` document to a Service entity."""
    data = as_mapping(data)
    title = as_text(data.get("title"))
    return Service(
        id=doc_id,
        slug=as_text(data.get("slug")),
        title=title,
        title_lowercase=as_text(data.get("title_lowercase")) or title.lower(),
        short_description=as_text(data.get("shortDescription")),
        long_description=as_text(data.get("longDescription")),
        category=resolve_category(SERVICE_CATEGORIES, data.get("categoryId")),
        pricing=_pricing(data.get("pricing")),
        tags=as_str_list(data.get("tags")),
        image_url=as_text(data.get("imageUrl")) or PLACEHOLDER_IMAGE_URL,
        data_ai_hint=as_text(data.get("dataAiHint")),
        status=as_text(data.get("status")) or "draft",
        key_features=as_str_list(data.get("keyFeatures")),
        target_audience=as_str_list(data.get("targetAudience")),
        estimated_duration=as_text(data.get("estimatedDuration")),
        portfolio_link=as_text(data.get("portfolioLink")),
        service_url=as_text(data.get("serviceUrl")),
        show_faq_section=as_bool(data.get("showFaqSection")),
        faq=_faq(data.get("faq")),
        customer_journey_stages=_journey_stages(data.get("customerJourneyStages")),
        created_at=to_iso_timestamp(data.get("createdAt"), field_name=f"services/{doc_id}.createdAt"),
        updated_at=to_optional_iso_timestamp(data.get("updatedAt"), field_name=f"services/{doc_id}.updatedAt"),
    )


# ── Templates ────────────────────────────────────────────────────────


def template_from_firestore(doc_id: str, data: dict[str, Any] | None) -> Template:
    """Map a ``templates`` document to a Template entity."""
    data = as_mapping(data)
    return Template(
        id=doc_id,
        title=as_text(data.get("title")),
        description=as_text(data.get("description")),
        long_description=as_text(data.get("longDescription")),
        category=resolve_category(TEMPLATE_CATEGORIES, data.get("categoryId")),
        price=as_number(data.get("price")),
        tags=as_str_list(data.get("tags")),
        tech_stack=as_str_list(data.get("techStack")),
        image_url=as_text(data.get("imageUrl")),
        data_ai_hint=as_text(data.get("dataAiHint")),
        preview_url=as_text(data.get("previewUrl")),
        screenshots=as_str_list(data.get("screenshots")),
        download_zip_url=as_text(data.get("downloadZipUrl")) or "#",
        github_url=as_text(data.get("githubUrl")),
        author=as_text(data.get("author")),
        created_at=to_iso_timestamp(data.get("createdAt"), field_name=f"templates/{doc_id}.createdAt"),
        updated_at=to_optional_iso_timestamp(data.get("updatedAt"), field_name=f"templates/{doc_id}.updatedAt"),
    )


# ── Orders ───────────────────────────────────────────────────────────


def _purchased_item(raw: Any) -> PurchasedItem:
    raw = as_mapping(raw)
    return PurchasedItem(
        id=as_text(raw.get("id")),
        title=as_text(raw.get("title")) or "N/A",
        price=as_number(raw.get("price")),
    )


def order_from_firestore(doc_id: str, data: dict[str, Any] | None) -> Order:
    """Map an ``orders`` document to an Order entity."""
    data = as_mapping(data)
    return Order(
        id=doc_id,
        order_id=as_text(data.get("orderId")) or doc_id,
        user_id=as_text(data.get("userId")),
        user_email=as_text(data.get("userEmail")),
        items=[_purchased_item(item) for item in as_list(data.get("items"))],
        total_amount=as_number(data.get("totalAmount")),
        currency=as_text(data.get("currency")) or "IDR",
        status=as_text(data.get("status")) or "pending",
        payment_gateway=as_text(data.get("paymentGateway")),
        xendit_invoice_id=as_optional_text(data.get("xenditInvoiceId")),
        xendit_invoice_url=as_optional_text(data.get("xenditInvoiceUrl")),
        xendit_expiry_date=as_optional_text(data.get("xenditExpiryDate")),
        xendit_payment_status=as_optional_text(data.get("xenditPaymentStatus")),
        created_at=to_iso_timestamp(data.get("createdAt"), field_name=f"orders/{doc_id}.createdAt"),
        updated_at=to_optional_iso_timestamp(data.get("updatedAt"), field_name=f"orders/{doc_id}.updatedAt"),
    )


# ── Users ────────────────────────────────────────────────────────────


def user_profile_from_firestore(doc_id: str, data: dict[str, Any] | None) -> UserProfile:
    """Map a ``users`` document (keyed by uid) to a UserProfile entity."""
    data = as_mapping(data)
    return UserProfile(
        id=doc_id,
        email=as_text(data.get("email")),
        display_name=as_text(data.get("displayName")),
        photo_url=as_optional_text(data.get("photoURL")),
        role=as_text(data.get("role")) or "user",
        created_at=to_iso_timestamp(data.get("createdAt"), field_name=f"users/{doc_id}.createdAt"),
        updated_at=to_optional_iso_timestamp(data.get("updatedAt"), field_name=f"users/{doc_id}.updatedAt"),
    )


def template_to_firestore(template: Template) -> dict[str, Any]:
    """Writable fields of a template document; timestamps are added by the repository."""
    return {
        "title": template.title,
        "title_lowercase": template.title.lower(),
        "description": template.description,
        "longDescription": template.long_description,
        "categoryId": template.category.id,
        "price": template.price,
        "tags": list(template.tags),
        "techStack": list(template.tech_stack),
        "imageUrl": template.image_url,
        "dataAiHint": template.data_ai_hint,
        "previewUrl": template.preview_url,
        "screenshots": list(template.screenshots),
        "downloadZipUrl": template.download_zip_url,
        "githubUrl": template.github_url,
        "author": template.author,
    }
