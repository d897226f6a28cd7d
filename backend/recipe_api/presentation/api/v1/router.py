"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from recipe_api.presentation.api.v1.endpoints.health import router as health_router
from recipe_api.presentation.api.v1.endpoints.recipes import router as recipes_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(recipes_router)
