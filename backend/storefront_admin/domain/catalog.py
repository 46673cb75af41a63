"""Static lookup tables — categories and default customer-journey stages."""

import re

from .entities import Category, JourneyStage

PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400.png"

TEMPLATE_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Dashboards", slug="dashboards"),
    Category(id="2", name="E-commerce", slug="ecommerce"),
    Category(id="3", name="POS", slug="pos"),
    Category(id="4", name="Portfolio", slug="portfolio"),
    Category(id="5", name="Landing Pages", slug="landing-pages"),
    Category(id="6", name="SaaS", slug="saas"),
    Category(id="7", name="Utility", slug="utility"),
    Category(id="8", name="AI Powered", slug="ai-powered"),
)

SERVICE_CATEGORIES: tuple[Category, ...] = (
    Category(id="website-development", name="Website Development", slug="website-development"),
    Category(id="mobile-app", name="Mobile App", slug="mobile-app"),
    Category(id="ecommerce-solutions", name="E-commerce Solutions", slug="ecommerce-solutions"),
    Category(id="ui-ux-design", name="UI/UX Design", slug="ui-ux-design"),
    Category(id="digital-marketing", name="Digital Marketing", slug="digital-marketing"),
    Category(id="erp-integration", name="ERP Integration", slug="erp-integration"),
    Category(id="maintenance-support", name="Maintenance & Support", slug="maintenance-support"),
)


def resolve_category(lookup: tuple[Category, ...], category_id: object) -> Category:
    """Find a category by id, falling back to the first entry of the lookup."""
    if isinstance(category_id, str):
        for category in lookup:
            if category.id == category_id:
                return category
    return lookup[0]


def slugify(text: str) -> str:
    """Lower-case, hyphen-separated slug (also used as ERPNext item_code)."""
    slug = re.sub(r"\s+", "-", str(text).strip().lower())
    slug = re.sub(r"[^\w\-]+", "", slug)
    return re.sub(r"-{2,}", "-", slug)


DEFAULT_JOURNEY_STAGES: tuple[JourneyStage, ...] = (
    JourneyStage(
        id="discovery",
        title="Discovery",
        details="- Touchpoints: homepage, services list, paid ads, social media, WhatsApp campaigns\n"
                "- Key action: open the dedicated service landing page",
        placeholder="How is the service first presented to the visitor?",
    ),
    JourneyStage(
        id="service-landing-page",
        title="Service Landing Page",
        details="- Hero, value propositions, demo links and success stories\n"
                "- CTAs: Start Now, Preview Demo, Chat First",
        placeholder="Layout and visual hierarchy of the landing page.",
    ),
    JourneyStage(
        id="cart",
        title="Cart",
        details="- Confirms the selected service and billing duration\n- Stored client-side until checkout",
        placeholder="Order summary and billing-duration controls.",
        image_ai_hint="shopping cart summary",
    ),
    JourneyStage(
        id="sign-in-up",
        title="Sign In / Sign Up",
        details="- Google OAuth and email sign-in\n- Onboarding progress is restored after login",
        placeholder="How saved onboarding progress is shown on return.",
    ),
    JourneyStage(
        id="dashboard-start-project",
        title="Dashboard: Start Project",
        details="- Auto-generated project draft from onboarding\n"
                "- Steps: business info, domain, template, package, custom features",
        placeholder="How the draft project and its steps are presented.",
    ),
    JourneyStage(
        id="select-package-addons",
        title="Select Package & Add-ons",
        details="- Pricing tiers with visual comparison\n- Add-ons and an upsell to full custom development",
        placeholder="How tiers and add-ons are told apart.",
    ),
    JourneyStage(
        id="checkout",
        title="Checkout",
        details="- Transparent cost breakdown\n- Card, virtual account and QRIS payment options",
        placeholder="Cost breakdown and payment option presentation.",
    ),
    JourneyStage(
        id="project-status-tracker",
        title="Project Status Tracker",
        details="- Timeline: planning, development, review, launch\n- Chat, asset upload, domain status",
        placeholder="Timeline visualisation and collaboration tools.",
    ),
    JourneyStage(
        id="launch-delivery",
        title="Launch & Delivery",
        details="- Final preview, DNS guide, Go Live button\n- Confirmation page with CMS guide",
        placeholder="Go-live confirmation and guides.",
    ),
    JourneyStage(
        id="post-launch-retention",
        title="Post-Launch & Retention",
        details="- Performance emails and traffic stats\n- Plan management, renewals and upgrade CTA",
        placeholder="Post-launch dashboard and upgrade prompts.",
    ),
)
