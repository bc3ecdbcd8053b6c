"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rfp_desk import __version__
from rfp_desk.api.routes import router
from rfp_desk.config import get_settings
from rfp_desk.errors import (
    InvalidFormatError,
    ReadOnlyRecordError,
    RecordNotFoundError,
    RecordValidationError,
)
from rfp_desk.utils.logging import get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    logger.info("Starting RFP desk API", storage=str(settings.storage_file))
    yield
    logger.info("Shutting down RFP desk API")


def _error(status_code: int, error: str, exc: Exception, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": str(exc), **extra})


def register_error_handlers(app: FastAPI) -> None:
    """Map data-layer errors onto HTTP responses."""

    @app.exception_handler(RecordValidationError)
    async def validation_error(request: Request, exc: RecordValidationError) -> JSONResponse:
        return _error(422, "validation_error", exc, fields=exc.fields)

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(404, "not_found", exc)

    @app.exception_handler(ReadOnlyRecordError)
    async def read_only(request: Request, exc: ReadOnlyRecordError) -> JSONResponse:
        return _error(403, "read_only", exc)

    @app.exception_handler(InvalidFormatError)
    async def invalid_format(request: Request, exc: InvalidFormatError) -> JSONResponse:
        logger.warning("Rejected invalid data", path=request.url.path, error=str(exc))
        return _error(400, "invalid_format", exc)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="RFP Desk API",
        description="Local RFP store with tab views, search, attachments and share links",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "RFP Desk API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create app instance for uvicorn
app = create_app()
