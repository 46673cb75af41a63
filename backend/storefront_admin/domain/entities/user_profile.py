"""Domain entity — a signed-up storefront user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    id: str
    email: str = ""
    display_name: str = ""
    photo_url: str | None = None
    role: str = "user"  # "user" | "admin"
    created_at: str = ""
    updated_at: str | None = None
    # Filled in by the users table from the user's paid orders.
    order_count: int = 0
    total_spent: float = 0
