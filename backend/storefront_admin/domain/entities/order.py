"""Domain entities — customer orders and the items they contain."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PurchasedItem:
    id: str
    title: str = "N/A"
    price: float = 0


@dataclass(frozen=True)
class Order:
    """An order placed through the storefront checkout.

    ``id`` is the backend document id; ``order_id`` is the human-facing
    reference shown to customers and payment gateways.
    """

    id: str
    order_id: str = ""
    user_id: str = ""
    user_email: str = ""
    items: list[PurchasedItem] = field(default_factory=list)
    total_amount: float = 0
    currency: str = "IDR"
    status: str = "pending"
    payment_gateway: str = ""
    xendit_invoice_id: str | None = None
    xendit_invoice_url: str | None = None
    xendit_expiry_date: str | None = None
    xendit_payment_status: str | None = None
    created_at: str = ""
    updated_at: str | None = None
