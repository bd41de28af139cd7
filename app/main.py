"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import auth_router, carousel_router, hero_router, presentation_router
from app.config import settings
from app.db import Database
from app.schemas.common import format_validation_errors
from app.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    database: Database = app.state.database
    database.connect()
    app.state.image_storage.root.mkdir(parents=True, exist_ok=True)
    logger.info("LABTIM CMS started")
    yield
    await database.close()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors in the ``{success, message}`` envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors (400)."""
    message = format_validation_errors(exc.errors())
    logger.info(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": f"Invalid request body. {message}"},
    )


def create_app(
    database: Database | None = None,
    image_storage: ImageStorage | None = None,
) -> FastAPI:
    """Build the application around an explicit database handle and upload store."""
    app = FastAPI(
        title="LABTIM CMS",
        description="Content management backend for the LABTIM research lab website",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.database = database or Database(settings.database_url, echo=settings.app_debug)
    app.state.image_storage = image_storage or ImageStorage()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(carousel_router, prefix="/api")
    app.include_router(hero_router, prefix="/api")
    app.include_router(presentation_router, prefix="/api")

    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=app.state.image_storage.root, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "service": "labtim-cms"}

    @app.get("/")
    async def root() -> dict:
        """Root endpoint."""
        return {
            "service": "LABTIM CMS",
            "version": "0.1.0",
            "docs": "/docs",
        }

    return app


configure_logging()
app = create_app()
