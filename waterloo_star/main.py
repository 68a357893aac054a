"""
FastAPI application main module.
Wires settings, the selected post repository and the post service together
and adds request logging and error envelopes.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from waterloo_star.api.v1 import api_router
from waterloo_star.config import ForumSettings, SIDEBAR_SECTIONS, SITE_DESCRIPTION, SITE_NAME, load_settings
from waterloo_star.exceptions import ForumError, InvalidArgument
from waterloo_star.models.enums import Amenity, Utility
from waterloo_star.repositories import create_repository
from waterloo_star.services.pagination import build_error_response
from waterloo_star.services.post_service import PostService
from waterloo_star.utils import get_logger, setup_logging

logger = get_logger(__name__)

VERSION = "0.1.0"


def _error_json(status_code: int, message: str, request_id: str, details: Optional[dict] = None) -> JSONResponse:
    body = build_error_response(status_code, message, details).model_dump(by_alias=True, exclude_none=True)
    body["requestId"] = request_id
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def create_app(settings: Optional[ForumSettings] = None) -> FastAPI:
    """
    Build the application. Settings are resolved here, once; the repository
    choice cannot change for the lifetime of the returned app.
    """
    settings = settings or load_settings()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file, enable_console=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Application startup completed",
            backend=settings.backend_name,
            api_base_url=None if settings.use_mocks else settings.api_base_url,
        )
        yield
        logger.info("Application shutdown completed")

    app = FastAPI(
        title=f"{SITE_NAME} API",
        description=SITE_DESCRIPTION,
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/api/v1/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.post_service = PostService(create_repository(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_context_and_logging(request: Request, call_next):
        """Attach a request id and log timing for every request."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            url=str(request.url),
            request_id=request_id
        )

        response = await call_next(request)

        process_time_ms = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time_ms)
        response.headers["X-Content-Type-Options"] = "nosniff"

        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            process_time_ms=process_time_ms,
            request_id=request_id
        )
        return response

    @app.exception_handler(ForumError)
    async def forum_error_handler(request: Request, exc: ForumError):
        """Render data access errors as envelopes, message verbatim."""
        request_id = getattr(request.state, "request_id", "unknown")
        log = logger.error if isinstance(exc, InvalidArgument) or exc.status_code >= 500 else logger.warning
        log(
            "Request failed",
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            error=exc.message,
            request_id=request_id,
            url=str(request.url),
            method=request.method
        )
        return _error_json(exc.status_code, exc.message, request_id, exc.details())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        request_id = getattr(request.state, "request_id", "unknown")
        logger.warning(
            "Request validation failed",
            errors=exc.errors(),
            request_id=request_id,
            url=str(request.url),
            method=request.method
        )
        return _error_json(422, "Request validation failed", request_id, {"errors": exc.errors()})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        request_id = getattr(request.state, "request_id", "unknown")
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            request_id=request_id,
            url=str(request.url),
            method=request.method
        )
        return _error_json(exc.status_code, str(exc.detail), request_id)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            url=str(request.url),
            method=request.method,
            exc_info=True
        )
        return _error_json(500, "Internal server error", request_id)

    @app.get("/health", tags=["health"], summary="Basic health check")
    async def health_check():
        return {
            "status": "healthy",
            "service": "waterloo-star",
            "version": VERSION,
            "backend": settings.backend_name,
            "timestamp": time.time(),
        }

    @app.get("/", tags=["root"])
    async def root():
        return {
            "name": SITE_NAME,
            "description": SITE_DESCRIPTION,
            "sidebar": SIDEBAR_SECTIONS,
            "listing": {
                "amenities": [amenity.value for amenity in Amenity],
                "utilities": [utility.value for utility in Utility],
            },
            "version": VERSION,
            "documentation": "/docs",
            "health_check": "/health",
            "api_base": "/api/v1"
        }

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info("Starting development server")

    uvicorn.run(
        "waterloo_star.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["waterloo_star"],
        log_level="info",
        access_log=True
    )
