"""Domain entity — catalogue category shared by services and templates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    """A named grouping used to browse services and templates."""

    id: str
    name: str
    slug: str
