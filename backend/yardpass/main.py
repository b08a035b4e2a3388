"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from yardpass.application.interfaces import KeyValueStore
from yardpass.config import Settings, get_settings
from yardpass.infrastructure.kv import build_key_value_store
from yardpass.infrastructure.logging.log_config import setup_logging
from yardpass.infrastructure.storage.local_file_storage import PUBLIC_URL_PREFIX, UPLOADS_SUBDIR
from yardpass.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — open the key-value store, close it on shutdown."""
    setup_logging(app.state.settings)
    store: KeyValueStore = app.state.kv_store
    await store.start()
    logger.info("Key-value store started: %s (persistent=%s)", store.name, store.persistent)

    yield

    await store.close()


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        problems.append(f"{location}: {error['msg']}" if location else error["msg"])
    return JSONResponse(
        {"error": "; ".join(problems) or "Invalid request"},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def create_app(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    ``settings`` and ``store`` default to the ones described by the
    environment; tests pass their own.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.kv_store = store or build_key_value_store(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    # Mount API routes
    app.include_router(api_router)

    # Admin uploads
    app.mount(
        PUBLIC_URL_PREFIX,
        StaticFiles(directory=Path(settings.upload_dir) / UPLOADS_SUBDIR, check_dir=False),
        name="uploads",
    )

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "yardpass.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
