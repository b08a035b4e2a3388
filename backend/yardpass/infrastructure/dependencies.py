"""FastAPI dependency injection — wires infrastructure to application layer.

Long-lived objects (settings, key-value store) are built once
by ``create_app`` and kept on ``app.state``; services are cheap and built
per request around them.
"""

from fastapi import Depends, HTTPException, Request, status

from yardpass.application.interfaces import KeyValueStore
from yardpass.application.services import (
    ADMIN_COOKIE_NAME,
    AdminAuthService,
    CmsService,
    PassService,
)
from yardpass.config import Settings
from yardpass.infrastructure.persistence import KeyValueCmsRepository, KeyValuePassRepository
from yardpass.infrastructure.storage.local_file_storage import LocalFileStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_key_value_store(request: Request) -> KeyValueStore:
    return request.app.state.kv_store


async def get_pass_service(
    store: KeyValueStore = Depends(get_key_value_store),
) -> PassService:
    """Provides a PassService with its repository wired up."""
    return PassService(KeyValuePassRepository(store))


async def get_cms_service(
    store: KeyValueStore = Depends(get_key_value_store),
) -> CmsService:
    """Provides a CmsService with its repository wired up."""
    return CmsService(KeyValueCmsRepository(store))


async def get_admin_auth_service(
    settings: Settings = Depends(get_app_settings),
) -> AdminAuthService:
    return AdminAuthService(
        password=settings.admin_password,
        secret=settings.session_secret,
        max_age=settings.admin_session_max_age,
    )


async def get_file_storage(
    settings: Settings = Depends(get_app_settings),
) -> LocalFileStorage:
    return LocalFileStorage(upload_dir=settings.upload_dir, max_bytes=settings.max_upload_bytes)


async def require_admin(
    request: Request,
    auth: AdminAuthService = Depends(get_admin_auth_service),
) -> None:
    """Reject the request with 401 unless it carries a valid admin session cookie."""
    if not auth.is_valid_token(request.cookies.get(ADMIN_COOKIE_NAME)):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
