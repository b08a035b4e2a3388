"""Fan pass endpoints — create, fetch and download the device's pass."""

import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from yardpass.application.interfaces import data_url_to_bytes
from yardpass.application.schemas.fan_pass import (
    PassCreate,
    PassCreatedEnvelope,
    PassEnvelope,
    PassResponse,
)
from yardpass.application.services import PassService
from yardpass.config import Settings
from yardpass.domain.exceptions import EntityNotFoundError, PassValidationError
from yardpass.domain.identity import ANON_COOKIE_NAME, generate_anon_id
from yardpass.infrastructure.dependencies import get_app_settings, get_pass_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/passes", tags=["Passes"])


def client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


def _resolve_anon_id(request: Request, query_anon_id: str | None) -> str | None:
    return query_anon_id or request.cookies.get(ANON_COOKIE_NAME)


@router.post("", response_model=PassCreatedEnvelope, status_code=status.HTTP_201_CREATED)
async def create_pass(
    data: PassCreate,
    request: Request,
    response: Response,
    service: PassService = Depends(get_pass_service),
    settings: Settings = Depends(get_app_settings),
) -> PassCreatedEnvelope:
    """Store a generated pass for this device, replacing any previous one."""
    anon_id = request.cookies.get(ANON_COOKIE_NAME)
    is_new_device = not anon_id
    anon_id = anon_id or generate_anon_id()

    try:
        fan_pass = await service.create_pass(
            data,
            anon_id=anon_id,
            ip=client_ip(request),
            user_agent=request.headers.get("user-agent", "unknown"),
        )
    except PassValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception:
        logger.exception("POST /api/passes failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save pass")

    if is_new_device:
        response.set_cookie(
            ANON_COOKIE_NAME,
            anon_id,
            max_age=settings.anon_cookie_max_age,
            path="/",
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )
    return PassCreatedEnvelope(fan_pass=PassResponse.from_entity(fan_pass))


@router.get("", response_model=PassEnvelope)
async def get_pass(
    request: Request,
    anon_id: str | None = Query(None, alias="anonId"),
    service: PassService = Depends(get_pass_service),
) -> PassEnvelope:
    """Return this device's pass, or ``{"pass": null}``."""
    try:
        fan_pass = await service.get_pass(_resolve_anon_id(request, anon_id))
    except Exception:
        logger.exception("GET /api/passes failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch pass")
    return PassEnvelope(fan_pass=PassResponse.from_entity(fan_pass) if fan_pass else None)


@router.get("/image")
async def download_pass_image(
    request: Request,
    anon_id: str | None = Query(None, alias="anonId"),
    service: PassService = Depends(get_pass_service),
) -> Response:
    """Download the stored card image exactly as it was exported."""
    try:
        fan_pass = await service.require_pass(_resolve_anon_id(request, anon_id))
        png = data_url_to_bytes(fan_pass.png_data_url)
    except EntityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pass not found")
    except (binascii.Error, ValueError):
        logger.exception("Stored pass image is not valid base64")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to read pass image")
    except Exception:
        logger.exception("GET /api/passes/image failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch pass")

    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{fan_pass.id}.png"'},
    )
