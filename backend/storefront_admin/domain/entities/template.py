"""Domain entity — a purchasable website template."""

from dataclasses import dataclass, field

from .category import Category


@dataclass(frozen=True)
class Template:
    id: str
    title: str
    category: Category
    description: str = ""
    long_description: str = ""
    price: float = 0
    tags: list[str] = field(default_factory=list)
    tech_stack: list[str] = field(default_factory=list)
    image_url: str = ""
    data_ai_hint: str = ""
    preview_url: str = ""
    screenshots: list[str] = field(default_factory=list)
    download_zip_url: str = "#"
    github_url: str = ""
    author: str = ""
    created_at: str = ""
    updated_at: str | None = None
