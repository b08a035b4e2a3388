"""Pydantic DTOs for admin login and uploads."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str = ""


class SuccessResponse(BaseModel):
    success: bool = True


class UploadResult(BaseModel):
    """Returned after an admin upload is stored."""

    ok: bool = True
    url: str
    pathname: str
    filename: str
    size: int
    type: str
