"""Main FastAPI Application

Wires middleware, the global exception handlers that render the single
error envelope, and the API routers from `presentation`.

Run locally for development with:

    uvicorn main:app --reload

Keep application logic in `application`, `domain` and `infrastructure`;
this module only assembles the app.
"""
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from core.config import settings
from core.database import init_db, close_db, health_check
from core.logging_config import configure_logging
from core.exceptions import DomainException, ErrorKind, InvalidStateException, ValidationException
from infrastructure.cache.redis_cache_service import cache_service
import infrastructure.persistence.models  # noqa: F401  registers tables on Base.metadata
from presentation.api.v1.endpoints import (
    auth_router,
    users_router,
    jobs_router,
    applications_router,
    messages_router,
    files_router,
)
from presentation.api.v1.rate_limit import limiter
from presentation.api.v1.schemas.common import ErrorResponse


configure_logging()


STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(kind: ErrorKind, message: str, reason: str = None, fields: dict = None) -> dict:
    """Single error envelope shared by every endpoint"""
    error = {"kind": kind.value, "message": message}
    if reason:
        error["reason"] = reason
    if fields:
        error["fields"] = fields
    return {"error": error}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info(f"🚀 Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    await init_db()
    logger.info("✅ Database initialized")

    await cache_service.connect()

    yield

    # Shutdown
    logger.info("👋 Shutting down gracefully...")
    await cache_service.disconnect()
    await close_db()
    logger.info("✅ Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board API: profiles, job postings, applications and messages",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    """Render domain-level exceptions in the error envelope"""
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(f"Internal error on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")

    reason = exc.reason if isinstance(exc, InvalidStateException) else None
    fields = exc.errors if isinstance(exc, ValidationException) else None
    message = exc.message if exc.kind != ErrorKind.INTERNAL else "Internal server error"

    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content=error_body(exc.kind, message, reason=reason, fields=fields)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and query strings"""
    fields = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        fields[str(loc[-1])] = error.get("msg", "Invalid value")
    logger.warning(f"ValidationFailed on {request.method} {request.url.path}: {fields}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(ErrorKind.VALIDATION_FAILED, "Validation failed", fields=fields)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler"""
    logger.opt(exception=exc).error(f"Unhandled exception on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(ErrorKind.INTERNAL, "Internal server error")
    )


# Include API routes
ERROR_RESPONSES = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404)}

app.include_router(auth_router, prefix="/api/v1/auth", tags=["Authentication"], responses=ERROR_RESPONSES)
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"], responses=ERROR_RESPONSES)
app.include_router(jobs_router, prefix="/api/v1/jobs", tags=["Jobs"], responses=ERROR_RESPONSES)
app.include_router(applications_router, prefix="/api/v1/applications", tags=["Applications"], responses=ERROR_RESPONSES)
app.include_router(messages_router, prefix="/api/v1/messages", tags=["Messages"], responses=ERROR_RESPONSES)
app.include_router(files_router, prefix="/api/v1/files", tags=["Files"], responses=ERROR_RESPONSES)


@app.get("/health")
async def health():
    """Liveness plus a database round trip"""
    database_ok = await health_check()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
            "cache": "ok" if cache_service.connected else "disabled",
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
