"""Admin endpoints — session login, pass listing, CMS editing and uploads."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from pydantic import ValidationError

from yardpass.application.schemas.admin import LoginRequest, SuccessResponse, UploadResult
from yardpass.application.schemas.cms import CmsResponse, CmsUpdateRequest
from yardpass.application.schemas.fan_pass import PassListResponse, PassResponse
from yardpass.application.services import (
    ADMIN_COOKIE_NAME,
    AdminAuthService,
    CmsService,
    PassService,
)
from yardpass.config import Settings
from yardpass.domain.exceptions import AuthenticationError, UploadRejectedError
from yardpass.infrastructure.dependencies import (
    get_admin_auth_service,
    get_app_settings,
    get_cms_service,
    get_file_storage,
    get_pass_service,
    require_admin,
)
from yardpass.infrastructure.storage.local_file_storage import LocalFileStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


# ── Session ──────────────────────────────────────────────────────────

@router.post("/login", response_model=SuccessResponse)
async def login(
    data: LoginRequest,
    response: Response,
    auth: AdminAuthService = Depends(get_admin_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse:
    """Check the admin password and set the signed session cookie."""
    if not auth.configured:
        logger.error("ADMIN_PASSWORD is not set; admin login is disabled")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server configuration error")
    try:
        auth.verify_password(data.password)
    except AuthenticationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    response.set_cookie(
        ADMIN_COOKIE_NAME,
        auth.issue_token(),
        max_age=auth.max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return SuccessResponse()


@router.delete("/login", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    response.delete_cookie(ADMIN_COOKIE_NAME, path="/")
    return SuccessResponse()


# ── Passes ───────────────────────────────────────────────────────────

@router.get("/passes", response_model=PassListResponse, dependencies=[Depends(require_admin)])
async def list_passes(
    service: PassService = Depends(get_pass_service),
) -> PassListResponse:
    """Every stored pass, newest first."""
    try:
        passes = await service.list_passes()
    except Exception:
        logger.exception("GET /api/admin/passes failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch passes")
    return PassListResponse(passes=[PassResponse.from_entity(p) for p in passes])


# ── CMS ──────────────────────────────────────────────────────────────

@router.get("/cms", response_model=CmsResponse, dependencies=[Depends(require_admin)])
async def get_cms(service: CmsService = Depends(get_cms_service)) -> CmsResponse:
    try:
        cms = await service.get_cms()
    except Exception:
        logger.exception("GET /api/admin/cms failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load CMS")
    return CmsResponse(cms=cms)


@router.put("/cms", response_model=CmsResponse, dependencies=[Depends(require_admin)])
async def update_cms(
    data: CmsUpdateRequest,
    service: CmsService = Depends(get_cms_service),
) -> CmsResponse:
    """Replace the live CMS document wholesale."""
    try:
        cms = await service.update_cms(data.cms)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid CMS document: {e.error_count()} error(s), first: {e.errors()[0]['msg']}",
        )
    except Exception:
        logger.exception("PUT /api/admin/cms failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save CMS")
    return CmsResponse(cms=cms)


@router.post("/cms/reset", response_model=CmsResponse, dependencies=[Depends(require_admin)])
async def reset_cms(service: CmsService = Depends(get_cms_service)) -> CmsResponse:
    try:
        cms = await service.reset_cms()
    except Exception:
        logger.exception("POST /api/admin/cms/reset failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to reset CMS")
    return CmsResponse(cms=cms)


# ── Uploads ──────────────────────────────────────────────────────────

@router.post("/upload", response_model=UploadResult, dependencies=[Depends(require_admin)])
async def upload_image(
    file: UploadFile | None = File(None),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> UploadResult:
    """Store an image for use in CMS content and return its public URL."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")
    try:
        content = await file.read()
        stored = await storage.store_upload(content, file.filename or "", file.content_type or "")
    except UploadRejectedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception:
        logger.exception("POST /api/admin/upload failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to upload file")

    return UploadResult(
        url=stored.url,
        pathname=stored.pathname,
        filename=stored.filename,
        size=stored.file_size,
        type=stored.mime_type,
    )
