"""Template CRUD endpoints (Firestore ``templates`` collection)."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront_admin.application.schemas import TemplateCreate, TemplateResponse, TemplateUpdate
from storefront_admin.application.services import TemplateService
from storefront_admin.domain.exceptions import (
    BackendRequestError,
    ConfigurationError,
    EntityNotFoundError,
)
from storefront_admin.infrastructure.dependencies import get_template_service
from storefront_admin.presentation.api.v1.errors import backend_http_exception

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    """Retrieve a single template by document ID."""
    try:
        template = await service.get_template(template_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return TemplateResponse.model_validate(template, from_attributes=True)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    data: TemplateCreate,
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    """Create a new template."""
    try:
        template = await service.create_template(data)
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return TemplateResponse.model_validate(template, from_attributes=True)


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: str,
    data: TemplateUpdate,
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    """Update an existing template; omitted fields keep their values."""
    try:
        template = await service.update_template(template_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
    return TemplateResponse.model_validate(template, from_attributes=True)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service),
) -> None:
    """Delete a template by document ID."""
    try:
        await service.delete_template(template_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ConfigurationError, BackendRequestError) as e:
        raise backend_http_exception(e) from e
