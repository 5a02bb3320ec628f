"""
FastAPI application factory and main app configuration.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .adapters.storage.unavailable_store import UnavailableDocumentStore
from .api.errors import APIError
from .api.routers import health, notes, patients, preferences, recording, session, settings as settings_router
from .api.schemas.common import ErrorResponse
from .core.config import get_settings
from .core.exceptions import MedScribeException
from .core.structured_logger import configure_logging
from .domain.errors import DomainError, InvalidPatientDataError, PatientNotFoundError
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware

logger = logging.getLogger("medscribe")

_DOMAIN_ERROR_STATUS = {
    PatientNotFoundError: 404,
    InvalidPatientDataError: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    mongo_client = None
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"📊 Environment: {settings.app_env}")
    logger.info(f"💾 Storage backend: {settings.storage.backend}")

    try:
        workspace = getattr(app.state, "workspace", None)
        if workspace is None:
            document_store = None
            if settings.storage.backend == "mongo":
                from pymongo.errors import PyMongoError

                from .adapters.db.mongo.connection import init_mongo

                try:
                    mongo_client = await init_mongo(settings.database)
                except PyMongoError as e:
                    logger.error(f"⚠️ MongoDB unavailable, storage falls back to memory: {type(e).__name__}")
                    document_store = UnavailableDocumentStore(f"MongoDB unavailable: {type(e).__name__}")

            from .api.deps import build_workspace

            workspace = build_workspace(settings, document_store=document_store)
            app.state.workspace = workspace

        if not workspace.loaded:
            await workspace.load()
        logger.info(f"✅ Application startup completed: {workspace.session.status}")
    except Exception as e:
        logger.error(f"❌ CRITICAL: Application startup failed: {type(e).__name__}: {e}")
        raise

    yield

    logger.info(f"🛑 Shutting down {settings.app_name}")
    await app.state.workspace.shutdown()
    if mongo_client is not None:
        mongo_client.close()


def _error_response(request: Request, status_code: int, error: str, message: str, details=None) -> JSONResponse:
    req_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            request_id=req_id or "",
            details=details or {},
        ).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title="MedScribe",
        description="Medical scribe: live transcription and AI-generated medical notes",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
        max_age=600,
    )
    app.add_middleware(PerformanceMiddleware, slow_request_seconds=1.0)
    # Registered last so it runs first and the request id is set for the others
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(session.router)
    app.include_router(recording.router)
    app.include_router(notes.router)
    app.include_router(patients.router)
    app.include_router(preferences.router)
    app.include_router(settings_router.router)

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "session": "GET /session",
                "clear_session": "POST /session/clear",
                "recording": "GET /recording",
                "start_recording": "POST /recording/start",
                "stop_recording": "POST /recording/stop",
                "generate_notes": "POST /notes/generate",
                "save_notes": "POST /notes/save-to-patient",
                "list_patients": "GET /patients",
                "add_patient": "POST /patients",
                "get_patient": "GET /patients/{patient_id}",
                "recent_visits": "GET /patients/{patient_id}/visits/recent",
                "select_patient": "POST /patients/{patient_id}/select",
                "clear_selection": "DELETE /patients/selection",
                "preferences": "GET|PUT /preferences",
                "api_settings": "GET|PUT /settings/api",
            },
        }

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = _DOMAIN_ERROR_STATUS.get(type(exc), 400)
        logger.warning(f"DomainError: {exc.error_code} ({status_code}) {exc.message}")
        return _error_response(request, status_code, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details)

    @app.exception_handler(MedScribeException)
    async def service_error_handler(request: Request, exc: MedScribeException):
        logger.error(f"MedScribeException: {exc.error_code} {exc.message}")
        return _error_response(request, 500, exc.error_code or "INTERNAL_ERROR", exc.message, exc.details)

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        req_id = getattr(request.state, "request_id", None)
        logger.error(f"APIError: {exc.code} ({exc.http_status}) {exc.message} | request_id={req_id}")
        return _error_response(request, exc.http_status, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def pydantic_error_handler(request: Request, exc: RequestValidationError):
        error_details = exc.errors()
        logger.warning(f"ValidationError on {request.method} {request.url.path}: {len(error_details)} errors")

        error_messages = []
        for error in error_details:
            loc = " -> ".join(str(x) for x in error.get("loc", []))
            msg = error.get("msg", "Validation error")
            error_messages.append(f"{loc}: {msg}")

        return _error_response(
            request,
            422,
            "INVALID_INPUT",
            f"Input validation failed: {'; '.join(error_messages)}",
            {
                "errors": [
                    {"loc": list(e.get("loc", [])), "msg": e.get("msg", "")} for e in error_details
                ],
                "path": request.url.path,
            },
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.error(f"Unhandled error: {type(exc).__name__} | request_id={req_id}", exc_info=exc)
        return _error_response(
            request,
            500,
            "INTERNAL_ERROR",
            "An unexpected error has occurred. Please try again later.",
        )

    return app


# Create the app instance
app = create_app()
