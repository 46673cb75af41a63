"""Read endpoints for storefront services (Firestore ``services`` collection)."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront_admin.application.schemas import ServiceResponse
from storefront_admin.application.services import ServiceCatalogService
from storefront_admin.domain.exceptions import (
    BackendRequestError,
    ConfigurationError,
    EntityNotFoundError,
)
from storefront_admin.infrastructure.dependencies import get_service_catalog_service
from storefront_admin.presentation.api.v1.errors import backend_http_exception

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("/slug/{slug}", response_model=ServiceResponse)
async def get_service_by_slug(
    slug: str,
    service: ServiceCatalogService = Depends(get_service_catalog_service),
) -> ServiceResponse:
    try:
        found = await service.get_service_by_slug(slug)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return ServiceResponse.model_validate(found, from_attributes=True)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    service: ServiceCatalogService = Depends(get_service_catalog_service),
) -> ServiceResponse:
    try:
        found = await service.get_service(service_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return ServiceResponse.model_validate(found, from_attributes=True)
