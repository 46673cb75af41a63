"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from storefront_admin.presentation.api.v1.endpoints.health import router as health_router
from storefront_admin.presentation.api.v1.endpoints.tables import router as tables_router
from storefront_admin.presentation.api.v1.endpoints.templates import router as templates_router
from storefront_admin.presentation.api.v1.endpoints.services import router as services_router
from storefront_admin.presentation.api.v1.endpoints.orders import router as orders_router
from storefront_admin.presentation.api.v1.endpoints.erp import router as erp_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(tables_router)
router.include_router(templates_router)
router.include_router(services_router)
router.include_router(orders_router)
router.include_router(erp_router)
