"""Abstract repository interface (port) for website templates."""

from abc import ABC, abstractmethod

from storefront_admin.domain.entities import Template


class TemplateRepository(ABC):
    """Port for template persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, template_id: str) -> Template | None:
        ...

    @abstractmethod
    async def create(self, template: Template) -> Template:
        """Persist a new template and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, template: Template) -> Template:
        ...

    @abstractmethod
    async def delete(self, template_id: str) -> bool:
        """Delete a template. Returns True if deleted, False if not found."""
        ...
