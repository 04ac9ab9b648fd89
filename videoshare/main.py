"""
Main FastAPI application for the VideoShare backend
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from videoshare import __version__
from videoshare.api.routes import api_router
from videoshare.core.config import Settings, settings as default_settings, validate_settings
from videoshare.core.error_handlers import register_error_handlers
from videoshare.core.logging_config import configure_logging
from videoshare.middleware.large_upload import LargeUploadMiddleware
from videoshare.middleware.request_logging import RequestLoggingMiddleware
from videoshare.services.file_upload import FileUploadService
from videoshare.store import MemoryStore

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(
        "Starting VideoShare API",
        environment=app.state.settings.ENVIRONMENT,
        uploads_dir=str(app.state.upload_service.upload_dir)
    )
    yield
    logger.info("Shutting down VideoShare API")


def create_app(settings: Optional[Settings] = None, store: Optional[MemoryStore] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Configuration to use instead of the environment-derived one
        store: Pre-populated store; a fresh seeded one is created otherwise
    """
    settings = settings or default_settings
    validate_settings(settings)
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR, settings.LOG_TO_FILE)

    if store is None:
        store = MemoryStore()
        store.seed(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)

    app = FastAPI(
        title="VideoShare API",
        description="Video sharing backend with uploads, embeds and range streaming",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store
    app.state.upload_service = FileUploadService(
        upload_dir=settings.UPLOADS_DIR,
        max_size=settings.MAX_UPLOAD_SIZE,
        chunk_size=settings.UPLOAD_CHUNK_SIZE
    )

    # Last added runs first: CORS, then sessions, then upload limits, then access logs
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(LargeUploadMiddleware, max_size=settings.MAX_UPLOAD_SIZE)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.is_production
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"]
    )

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "VideoShare API",
            "version": __version__,
            "environment": settings.ENVIRONMENT
        }

    return app


app = create_app()


def run():
    """Console entry point"""
    import uvicorn
    uvicorn.run(
        "videoshare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.ENVIRONMENT == "development"
    )


if __name__ == "__main__":
    run()
