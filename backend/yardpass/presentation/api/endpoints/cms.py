"""Public CMS read endpoint used by the marketing site."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from yardpass.application.services import CmsService
from yardpass.infrastructure.dependencies import get_cms_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cms", tags=["CMS"])


@router.get("")
async def get_public_cms(service: CmsService = Depends(get_cms_service)) -> dict:
    """Returns ``{"cms": <live document>}``."""
    try:
        cms = await service.get_cms()
    except Exception:
        logger.exception("GET /api/cms failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load CMS")
    return {"cms": cms}
