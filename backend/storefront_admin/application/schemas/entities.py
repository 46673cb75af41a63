"""Pydantic DTOs for templates, services, orders and ERPNext records."""

from pydantic import BaseModel, Field

from storefront_admin.domain.catalog import TEMPLATE_CATEGORIES


class CategorySchema(BaseModel):
    id: str
    name: str
    slug: str

    model_config = {"from_attributes": True}


# ── Templates ──


class TemplateCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, examples=["Admin Dashboard Pro"])
    category_id: str = Field(TEMPLATE_CATEGORIES[0].id, examples=["1"])
    description: str = ""
    long_description: str = ""
    price: float = Field(0, ge=0)
    tags: list[str] = []
    tech_stack: list[str] = []
    image_url: str = ""
    data_ai_hint: str = ""
    preview_url: str = ""
    screenshots: list[str] = []
    download_zip_url: str = "#"
    github_url: str = ""
    author: str = ""


class TemplateUpdate(BaseModel):
    """All fields optional — only provided fields change."""

    title: str | None = Field(None, min_length=1, max_length=200)
    category_id: str | None = None
    description: str | None = None
    long_description: str | None = None
    price: float | None = Field(None, ge=0)
    tags: list[str] | None = None
    tech_stack: list[str] | None = None
    image_url: str | None = None
    data_ai_hint: str | None = None
    preview_url: str | None = None
    screenshots: list[str] | None = None
    download_zip_url: str | None = None
    github_url: str | None = None
    author: str | None = None


class TemplateResponse(BaseModel):
    id: str
    title: str
    category: CategorySchema
    description: str
    long_description: str
    price: float
    tags: list[str]
    tech_stack: list[str]
    image_url: str
    data_ai_hint: str
    preview_url: str
    screenshots: list[str]
    download_zip_url: str
    github_url: str
    author: str
    created_at: str
    updated_at: str | None

    model_config = {"from_attributes": True}


# ── Services ──


class PackageFeatureSchema(BaseModel):
    id: str
    text: str
    is_included: bool

    model_config = {"from_attributes": True}


class ServicePackageSchema(BaseModel):
    id: str
    name: str
    description: str
    price_monthly: float
    original_price_monthly: float | None
    annual_price_calc_method: str
    annual_discount_percentage: float
    discounted_monthly_price: float
    renewal_info: str
    features: list[PackageFeatureSchema]
    is_popular: bool
    cta: str

    model_config = {"from_attributes": True}


class PricingSchema(BaseModel):
    is_fixed_price_active: bool
    fixed_price: float
    is_subscription_active: bool
    packages: list[ServicePackageSchema]
    is_custom_quote_active: bool
    custom_quote_description: str

    model_config = {"from_attributes": True}


class JourneyStageSchema(BaseModel):
    id: str
    title: str
    details: str
    placeholder: str
    image_url: str | None
    image_ai_hint: str | None

    model_config = {"from_attributes": True}


class FaqItemSchema(BaseModel):
    question: str
    answer: str

    model_config = {"from_attributes": True}


class ServiceResponse(BaseModel):
    id: str
    slug: str
    title: str
    short_description: str
    long_description: str
    category: CategorySchema
    pricing: PricingSchema
    tags: list[str]
    image_url: str
    data_ai_hint: str
    status: str
    key_features: list[str]
    target_audience: list[str]
    estimated_duration: str
    portfolio_link: str
    service_url: str
    show_faq_section: bool
    faq: list[FaqItemSchema]
    customer_journey_stages: list[JourneyStageSchema]
    created_at: str
    updated_at: str | None

    model_config = {"from_attributes": True}


# ── Orders ──


class PurchasedItemSchema(BaseModel):
    id: str
    title: str
    price: float

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: str
    order_id: str
    user_id: str
    user_email: str
    items: list[PurchasedItemSchema]
    total_amount: float
    currency: str
    status: str
    payment_gateway: str
    xendit_invoice_id: str | None
    xendit_invoice_url: str | None
    xendit_expiry_date: str | None
    xendit_payment_status: str | None
    created_at: str
    updated_at: str | None

    model_config = {"from_attributes": True}


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, examples=["paid"])
    xendit_payment_status: str | None = Field(None, examples=["PAID"])


# ── ERPNext ──


class ErpItemWrite(BaseModel):
    """Create/update body for a service stored as an ERPNext Item."""

    title: str = Field(..., min_length=1, max_length=140)
    item_group: str = Field(..., min_length=1, examples=["Website Development"])
    short_description: str = ""
    long_description: str = ""
    status: str = Field("active", pattern="^(active|inactive)$")
    image_url: str | None = None
    fixed_price: float = Field(0, ge=0)
    service_url: str = ""
    tags: list[str] = []


class CustomerCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=140)
    customer_type: str = Field("Individual", pattern="^(Company|Individual)$")
    customer_primary_email: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CustomerResponse(BaseModel):
    id: str
    customer_name: str
    customer_type: str
    customer_primary_email: str
    created_at: str
    updated_at: str | None

    model_config = {"from_attributes": True}
