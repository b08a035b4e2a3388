from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Yard Pass API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Admin access
    admin_password: str = ""
    admin_session_secret: str = ""
    admin_session_max_age: int = 12 * 60 * 60

    # Anonymous device cookie
    anon_cookie_max_age: int = 365 * 24 * 60 * 60

    # Key-value storage backends (empty → in-memory store)
    database_url: str = ""
    kv_rest_api_url: str = ""
    kv_rest_api_token: str = ""

    # File upload & storage
    upload_dir: str = "uploads"
    max_upload_size_mb: int = 10

    # Card rendering
    card_font_dir: str = ""

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_render: str = "INFO"           # card renderer + PassFlow
    log_level_storage: str = "INFO"          # key-value stores

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def session_secret(self) -> str:
        """Secret used to sign admin session cookies."""
        return self.admin_session_secret or self.admin_password

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
