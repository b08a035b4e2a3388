from .fan_pass import (
    PassCreate,
    PassCreatedEnvelope,
    PassEnvelope,
    PassListResponse,
    PassResponse,
)
from .cms import CmsDocument, CmsResponse, CmsUpdateRequest
from .admin import LoginRequest, SuccessResponse, UploadResult

__all__ = [
    "PassCreate",
    "PassCreatedEnvelope",
    "PassEnvelope",
    "PassListResponse",
    "PassResponse",
    "CmsDocument",
    "CmsResponse",
    "CmsUpdateRequest",
    "LoginRequest",
    "SuccessResponse",
    "UploadResult",
]
