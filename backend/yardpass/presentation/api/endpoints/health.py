"""Health check endpoint — reports whether storage and admin access are configured."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from yardpass.application.interfaces import KeyValueStore
from yardpass.config import Settings
from yardpass.infrastructure.dependencies import get_app_settings, get_key_value_store

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    store: KeyValueStore = Depends(get_key_value_store),
) -> dict:
    """Healthy only when passes persist and an admin password is set."""
    has_storage = store.persistent
    has_admin = bool(settings.admin_password)
    return {
        "status": "healthy" if has_storage and has_admin else "degraded",
        "version": settings.app_version,
        "environment": settings.app_env,
        "checks": {
            "storage": {
                "configured": has_storage,
                "backend": store.name,
                "message": f"{store.name} store connected" if has_storage
                else "No persistent store configured - passes won't survive a restart",
            },
            "admin": {
                "configured": has_admin,
                "message": "Admin password set" if has_admin else "ADMIN_PASSWORD not set",
            },
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
