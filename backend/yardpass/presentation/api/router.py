"""Top-level API router — aggregates all endpoint routers under ``/api``."""

from fastapi import APIRouter

from yardpass.presentation.api.endpoints.admin import router as admin_router
from yardpass.presentation.api.endpoints.cms import router as cms_router
from yardpass.presentation.api.endpoints.health import router as health_router
from yardpass.presentation.api.endpoints.passes import router as passes_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(passes_router)
router.include_router(admin_router)
router.include_router(cms_router)
