from .admin_auth_service import ADMIN_COOKIE_NAME, AdminAuthService
from .cms_service import CmsService
from .pass_flow import PassFlow
from .pass_service import PassService, validate_pass_fields

__all__ = [
    "ADMIN_COOKIE_NAME",
    "AdminAuthService",
    "CmsService",
    "PassFlow",
    "PassService",
    "validate_pass_fields",
]
