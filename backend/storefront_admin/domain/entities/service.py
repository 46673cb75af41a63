"""Domain entities — sellable services and their pricing packages."""

from dataclasses import dataclass, field

from .category import Category


@dataclass(frozen=True)
class PackageFeature:
    id: str
    text: str = ""
    is_included: bool = True


@dataclass(frozen=True)
class ServicePackage:
    """One subscription tier of a service."""

    id: str
    name: str = "Unnamed Package"
    description: str = ""
    price_monthly: float = 0
    original_price_monthly: float | None = None
    annual_price_calc_method: str = "percentage"  # "percentage" | "fixed"
    annual_discount_percentage: float = 0
    discounted_monthly_price: float = 0
    renewal_info: str = ""
    features: list[PackageFeature] = field(default_factory=list)
    is_popular: bool = False
    cta: str = "Choose Plan"


@dataclass(frozen=True)
class PricingDetails:
    """Which pricing models a service offers and their details.

    A service may combine a fixed price, subscription packages and a
    custom-quote option; each model is toggled independently.
    """

    is_fixed_price_active: bool = False
    fixed_price: float = 0
    is_subscription_active: bool = False
    packages: list[ServicePackage] = field(default_factory=list)
    is_custom_quote_active: bool = False
    custom_quote_description: str = ""

    @property
    def pricing_model(self) -> str:
        """Short label for the active pricing models, used for filtering."""
        models = []
        if self.is_fixed_price_active:
            models.append("fixed")
        if self.is_subscription_active:
            models.append("subscription")
        if self.is_custom_quote_active:
            models.append("custom quote")
        return ", ".join(models) or "none"


@dataclass(frozen=True)
class JourneyStage:
    id: str
    title: str = "Untitled Stage"
    details: str = ""
    placeholder: str = ""
    image_url: str | None = None
    image_ai_hint: str | None = None


@dataclass(frozen=True)
class FaqItem:
    question: str = ""
    answer: str = ""


@dataclass(frozen=True)
class Service:
    """Core domain entity representing a service offered in the storefront."""

    id: str
    title: str
    category: Category
    slug: str = ""
    title_lowercase: str = ""
    short_description: str = ""
    long_description: str = ""
    pricing: PricingDetails = field(default_factory=PricingDetails)
    tags: list[str] = field(default_factory=list)
    image_url: str = ""
    data_ai_hint: str = ""
    status: str = "draft"  # "draft" | "active" | "inactive"
    key_features: list[str] = field(default_factory=list)
    target_audience: list[str] = field(default_factory=list)
    estimated_duration: str = ""
    portfolio_link: str = ""
    service_url: str = ""
    show_faq_section: bool = False
    faq: list[FaqItem] = field(default_factory=list)
    customer_journey_stages: list[JourneyStage] = field(default_factory=list)
    created_at: str = ""
    updated_at: str | None = None
