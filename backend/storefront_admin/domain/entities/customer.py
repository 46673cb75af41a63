"""Domain entity — an ERPNext customer record."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    id: str
    customer_name: str = ""
    customer_type: str = "Individual"  # "Company" | "Individual"
    customer_primary_email: str = ""
    created_at: str = ""
    updated_at: str | None = None
