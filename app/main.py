"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError
from slowapi.errors import RateLimitExceeded

from app.api.photos import route as photos
from app.api.photos.signed_url import route as photo_signed_url
from app.api.photos.upload_url import route as photo_upload_url
from app.api.recipes import route as recipes
from app.api.recipes.by_id import route as recipe_by_id
from app.api.recipes.recommend import route as recipe_recommend
from app.api.routes import health
from app.config import settings
from app.core.context import get_request_id
from app.db.database import create_tables, database
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import get_rate_limit_exceeded_handler, limiter
from app.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from app.models.schema import format_validation_error
from app.utils.exceptions import (
    AuthenticationError,
    DatabaseError,
    ImageServiceError,
    LLMError,
    NotFoundError,
    SmartCookException,
    ValidationError,
)
from app.utils.logging_config import setup_logging

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SmartCook API",
    description="Recipe suggestions from your ingredients, saved recipes and team photos",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())


@app.exception_handler(SchemaValidationError)
async def schema_validation_handler(request: Request, exc: SchemaValidationError) -> JSONResponse:
    """Request bodies rejected by a route's schema."""
    details = format_validation_error(exc)
    logger.warning(
        "Schema validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": details},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation error", "details": details, "request_id": get_request_id()},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed query or path parameters."""
    details = {
        ".".join(str(part) for part in error["loc"]): [error["msg"]]
        for error in exc.errors()
    }
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": details},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation error", "details": details, "request_id": get_request_id()},
    )


@app.exception_handler(SmartCookException)
async def smartcook_exception_handler(request: Request, exc: SmartCookException) -> JSONResponse:
    """Map application exceptions to status codes."""
    request_id = get_request_id()
    detail = str(exc)

    if isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_message = "Unauthorized"
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = "Validation error"
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
        error_message = detail or "Not found"
    elif isinstance(exc, (LLMError, ImageServiceError)):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "Upstream service error"
        detail = "An upstream service failed"
    else:
        # DatabaseError and anything unforeseen: the store's error stays server-side
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = "Internal server error"
        detail = "An unexpected error occurred"

    log = logger.error if status_code >= 500 else logger.info
    log(
        f"Exception: {error_message}",
        extra={"exception": str(exc), "status_code": status_code},
        exc_info=status_code >= 500,
    )

    return JSONResponse(
        status_code=status_code,
        content={"error": error_message, "detail": detail, "request_id": request_id},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": get_request_id(),
        },
    )


# Add middleware (order matters!)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
setup_compression(app)
setup_cors(app)

# Include routers; the static recommend path goes before the {recipe_id} one
app.include_router(health.router)
app.include_router(recipes.router)
app.include_router(recipe_recommend.router)
app.include_router(recipe_by_id.router)
app.include_router(photos.router)
app.include_router(photo_signed_url.router)
app.include_router(photo_upload_url.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    logger.info("SmartCook API starting up...")
    await database.connect()
    await create_tables(database)
    logger.info(f"Log level: {settings.log_level}")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event."""
    await database.disconnect()
    logger.info("SmartCook API shutting down...")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SmartCook API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
