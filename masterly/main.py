"""
Masterly Concept Mastery Service

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from masterly.api.middleware.request_id import RequestIdMiddleware
from masterly.api.v1 import router as api_v1_router
from masterly.config import get_settings
from masterly.database import close_db, init_db
from masterly.kernel.errors import EngineError
from masterly.logging_config import configure_logging, get_logger
from masterly.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    Concept mastery tracking and learning path recommendation.

    ## Features

    - **Recommendations**: Cheapest path through the prerequisite graph to a goal concept
    - **Mastery**: Monotonic per-concept scores with a sticky mastered flag
    - **Unlocks**: Concepts become available once every prerequisite is mastered
    - **Progress**: Description, video and quiz steps with failure resets
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# add_middleware stacks innermost-first: CORS is added last so it wraps everything.
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_headers(request: Request) -> dict:
    """CORS and request id headers for error responses (500s bypass CORS middleware)."""
    origin = request.headers.get("origin") or ""
    origins = settings.cors_origins or ["*"]
    headers = {
        "Access-Control-Allow-Origin": origin if origin in origins else origins[0],
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "*",
        "Access-Control-Allow-Headers": "*",
    }
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    return headers


@app.exception_handler(EngineError)
async def engine_exception_handler(request: Request, exc: EngineError):
    """Map engine errors (not found, no path, validation, conflict) to their status."""
    if exc.status_code >= 500:
        logger.error("Engine error: %s", exc.message)
    else:
        logger.info("Request rejected: %s", exc.message, extra={"code": exc.code})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=_error_headers(request),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Ensure 401/404 etc. responses carry CORS headers."""
    headers = _error_headers(request)
    if exc.headers:
        headers.update(exc.headers)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error", "errors": errors},
        headers=_error_headers(request),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions; the message is only exposed in debug mode."""
    logger.exception("Unhandled exception: %s", exc)
    content = {
        "error": "Internal Server Error",
        "details": str(exc) if settings.debug else "An unexpected error occurred.",
        "request_id": getattr(request.state, "request_id", None),
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_error_headers(request),
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(status="ok", version=settings.version, database="connected")


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(api_v1_router, prefix=settings.api_v1_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "masterly.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
