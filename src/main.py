"""FastAPI application initialization."""

from contextlib import asynccontextmanager
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables before anything else
load_dotenv()

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import (
    CorrelationIdMiddleware,
    auth_router,
    health_router,
    user_platforms_router,
    users_router,
)
from src.config import get_settings
from src.errors import AppError, Unauthenticated
from src.services.i18n_service import get_translator, init_translator
from src.services.logging_service import configure_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger = get_logger("main")

    translator = init_translator()
    logger.info(
        "translator_initialized",
        source=translator.source,
        languages=translator.get_supported_languages(),
        default_language=translator.default_language,
    )

    if settings.uses_default_refresh_secret:
        logger.warning(
            "weak_refresh_secret",
            note="JWT_REFRESH_SECRET is not set; refresh tokens are signed with the built-in default",
        )

    # Initialize database connection pool and run migrations
    try:
        from src.database import init_database, run_migrations

        await init_database()
        await run_migrations()
        logger.info("database_initialized")
    except Exception as e:
        logger.warning(
            "database_initialization_failed",
            error=str(e),
            note="Continuing without database - account endpoints will fail",
        )

    logger.info("application_started", log_level=settings.log_level)

    yield

    # Shutdown
    try:
        from src.database import close_database

        await close_database()
    except Exception as e:
        logger.warning("database_close_failed", error=str(e))

    logger.info("application_shutdown")


app = FastAPI(
    title="OTP Accounts API",
    description="Account, session and stored TOTP credential management",
    version="0.1.0",
    lifespan=lifespan,
)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid4())


def _error_body(status_code: int, error: str, message: str, message_key: str, correlation_id: str) -> dict:
    return {
        "statusCode": status_code,
        "error": error,
        "message": message,
        "messageKey": message_key,
        "correlationId": correlation_id,
    }


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors with their localized message and stable key."""
    correlation_id = _correlation_id(request)
    headers = {"X-Correlation-Id": correlation_id}
    if isinstance(exc, Unauthenticated):
        headers["WWW-Authenticate"] = "Bearer"

    structlog.get_logger().info(
        "request_failed",
        correlation_id=correlation_id,
        status_code=exc.status_code,
        message_key=exc.message_key,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.error, exc.message, exc.message_key, correlation_id),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with a 400 and the first field error."""
    correlation_id = _correlation_id(request)
    language = getattr(request.state, "language", None)
    logger = structlog.get_logger()

    errors = exc.errors()
    if errors:
        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error.get("loc", ["unknown"]))
        message = first_error.get("msg", "Validation failed")
        detail = f"Field '{field}': {message}"
    else:
        detail = "Request validation failed"

    logger.warning(
        "validation_error",
        correlation_id=correlation_id,
        detail=detail,
    )

    body = _error_body(
        400,
        get_translator().translate("common.validation_error", language),
        detail,
        "common.validation_error",
        correlation_id,
    )
    return JSONResponse(
        status_code=400,
        content=body,
        headers={"X-Correlation-Id": correlation_id},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected, including store failures, becomes a 500."""
    correlation_id = _correlation_id(request)
    language = getattr(request.state, "language", None)
    structlog.get_logger().error(
        "unhandled_exception",
        correlation_id=correlation_id,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=_error_body(
            500,
            "Internal Server Error",
            get_translator().translate("common.internal_server_error", language),
            "common.internal_server_error",
            correlation_id,
        ),
        headers={"X-Correlation-Id": correlation_id},
    )


# CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Correlation ID middleware for request tracking and observability
app.add_middleware(CorrelationIdMiddleware)

# Include API routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(user_platforms_router)
app.include_router(health_router)
