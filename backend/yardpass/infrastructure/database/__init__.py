from .base import Base
from .session import build_engine, build_session_factory, get_async_url
from .models import KeyValueModel, SetMemberModel

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "get_async_url",
    "KeyValueModel",
    "SetMemberModel",
]
