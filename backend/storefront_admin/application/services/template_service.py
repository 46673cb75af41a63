"""Application service (use case) for Template operations."""

import dataclasses

from storefront_admin.application.interfaces import TemplateRepository
from storefront_admin.application.schemas import TemplateCreate, TemplateUpdate
from storefront_admin.domain.catalog import TEMPLATE_CATEGORIES, resolve_category
from storefront_admin.domain.entities import Template
from storefront_admin.domain.exceptions import EntityNotFoundError


class TemplateService:
    """Orchestrates template business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: TemplateRepository):
        self._repository = repository

    async def get_template(self, template_id: str) -> Template:
        template = await self._repository.get_by_id(template_id)
        if template is None:
            raise EntityNotFoundError("Template", template_id)
        return template

    async def create_template(self, data: TemplateCreate) -> Template:
        fields = data.model_dump(exclude={"category_id"})
        template = Template(
            id="",
            category=resolve_category(TEMPLATE_CATEGORIES, data.category_id),
            **fields,
        )
        return await self._repository.create(template)

    async def update_template(self, template_id: str, data: TemplateUpdate) -> Template:
        template = await self.get_template(template_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        category_id = changes.pop("category_id", None)
        if category_id is not None:
            changes["category"] = resolve_category(TEMPLATE_CATEGORIES, category_id)
        return await self._repository.update(dataclasses.replace(template, **changes))

    async def delete_template(self, template_id: str) -> bool:
        deleted = await self._repository.delete(template_id)
        if not deleted:
            raise EntityNotFoundError("Template", template_id)
        return deleted
