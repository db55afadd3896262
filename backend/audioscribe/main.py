from contextlib import asynccontextmanager
import time
import uuid
from typing import Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from audioscribe.api.routes import api_router
from audioscribe.core.config import Settings, settings as default_settings
from audioscribe.core.exceptions import BaseAPIException
from audioscribe.core.logging import setup_logging
from audioscribe.db.init_db import create_tables
from audioscribe.db.session import create_engine, create_session_factory
from audioscribe.services.storage_service import StorageService
from audioscribe.services.transcription_service import TranscriptionService


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all requests"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        # Generate a unique request ID
        request_id = uuid.uuid4().hex[:12]
        request.state.request_id = request_id

        logger.info(f"Request {request_id}: {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(f"Error {request_id}: {str(e)} after {process_time:.3f}s")
            raise

        process_time = time.time() - start_time
        logger.info(f"Response {request_id}: {response.status_code} completed in {process_time:.3f}s")

        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Request-ID"] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Builds the store engine, the shared HTTP client and the provider services
    once, and releases them on shutdown.
    """
    settings: Settings = app.state.settings

    engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables(engine)

    http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)

    app.state.session_factory = create_session_factory(engine)
    app.state.transcription_service = TranscriptionService(settings, http_client)
    app.state.storage_service = StorageService(settings, http_client)

    logger.info(f"Application startup complete: {settings.safe_summary()}")
    yield

    await http_client.aclose()
    await engine.dispose()
    logger.info("Application shutdown")


async def api_exception_handler(request: Request, exc: BaseAPIException):
    """Handle custom API exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_content(),
        headers=exc.headers or {},
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render schema validation failures as 400"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application"""
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Signup/login, audio upload and transcription backend",
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOC_URL,
        openapi_url=settings.OPENAPI_URL,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router)

    app.add_exception_handler(BaseAPIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    @app.get("/")
    async def root():
        """Liveness check"""
        return f"Server is live and running on port {settings.PORT}"

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "timestamp": time.time(),
        }

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "audioscribe.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )


if __name__ == "__main__":
    run()
