# ============================================================================
# FILE: musicflow/main.py
# ============================================================================
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
from musicflow.api.v1.router import api_router
from musicflow.config import Settings, get_settings
from musicflow.core.exceptions import AppError
from musicflow.core.logging import setup_logging
from musicflow.core.media_relay import MediaRelay
from musicflow.db.base import Base
from musicflow.db.models import playlist, song, topic, user  # noqa: F401  (register tables)
from musicflow.db.session import create_db_engine, create_session_factory
from musicflow.schemas.common import ErrorResponse
import logging

logger = logging.getLogger(__name__)

def _error(status_code: int, message: str, error=None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error).model_dump()
    return JSONResponse(status_code=status_code, content=body, headers=headers)

def register_exception_handlers(app: FastAPI) -> None:
    """Translate every failure into the uniform error envelope"""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.error})")
        return _error(exc.status_code, exc.message, exc.error)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return _error(400, "Invalid request", errors)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, "Internal server error", str(exc))

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with its own engine, session factory and media relay"""
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="MusicFlow API",
        description="Music catalog with topics, uploads and user playlists",
        version="1.0.0",
        debug=settings.DEBUG,
    )

    engine = create_db_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    relay = MediaRelay(settings)
    app.state.media_relay = relay

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API v1 router
    app.include_router(api_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup"""
        logger.info(f"Starting {settings.APP_NAME} API")
        Base.metadata.create_all(bind=engine)
        if not relay.configured:
            logger.warning("Cloudinary credentials missing; uploads will fail")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info(f"Shutting down {settings.APP_NAME} API")
        engine.dispose()

    @app.get("/health")
    async def health_check():
        return {"success": True, "data": {"status": "healthy"}}

    return app
