"""Abstract repository interface (port) for storefront services."""

from abc import ABC, abstractmethod

from storefront_admin.domain.entities import Service


class ServiceRepository(ABC):
    """Read-side port for services stored in Firestore."""

    @abstractmethod
    async def get_by_id(self, service_id: str) -> Service | None:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Service | None:
        """Return the first service whose slug matches, if any."""
        ...
