"""Application service for reading storefront services."""

from storefront_admin.application.interfaces import ServiceRepository
from storefront_admin.domain.entities import Service
from storefront_admin.domain.exceptions import EntityNotFoundError


class ServiceCatalogService:
    def __init__(self, repository: ServiceRepository):
        self._repository = repository

    async def get_service(self, service_id: str) -> Service:
        service = await self._repository.get_by_id(service_id)
        if service is None:
            raise EntityNotFoundError("Service", service_id)
        return service

    async def get_service_by_slug(self, slug: str) -> Service:
        service = await self._repository.get_by_slug(slug)
        if service is None:
            raise EntityNotFoundError("Service", slug)
        return service
