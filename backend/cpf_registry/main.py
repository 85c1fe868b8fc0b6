"""CPF Registry - Main Application.

User registry keyed by Brazilian CPF, with soft deletion and a derived
credit eligibility flag.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import api_router
from .core.config import settings
from .core.constants import ApiEndpoints, StoreBackends
from .core.exceptions import DomainError, NotFoundError
from .core.logging import get_logger, get_request_id, setup_logging
from .db.database import engine, init_db
from .middleware import PayloadSizeMiddleware, RequestIDMiddleware

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(
        "Application starting",
        extra={
            'environment': settings.ENVIRONMENT,
            'version': settings.APP_VERSION,
            'store_backend': settings.USER_STORE_BACKEND
        }
    )

    if settings.USER_STORE_BACKEND == StoreBackends.DATABASE:
        init_db(engine)
        logger.debug("Database schema initialized")

    yield

    logger.info("Application shutting down")
    engine.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="User registry keyed by CPF with credit eligibility",
    lifespan=lifespan,
    docs_url=ApiEndpoints.DOCS,
    redoc_url=ApiEndpoints.REDOC,
    openapi_url=ApiEndpoints.OPENAPI
)

# Middleware added last runs first: the request id is set before the size check
app.add_middleware(PayloadSizeMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Map domain errors to 404 (missing user) or 400 (anything else)."""
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    logger.warning(
        "Request rejected",
        extra={
            'error_type': type(exc).__name__,
            'status_code': status_code,
            'path': request.url.path
        }
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "detail": exc.message,
            "request_id": get_request_id()
        }
    )


# Include API routes
app.include_router(
    api_router,
    prefix=settings.API_V1_PREFIX
)


# Health check endpoint
@app.get(ApiEndpoints.HEALTH, tags=["Health"])
async def health_check():
    """Liveness probe."""
    return {
        "status": "healthy",
        "application": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


# Root endpoint
@app.get(ApiEndpoints.ROOT, tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "application": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": ApiEndpoints.DOCS,
        "health": ApiEndpoints.HEALTH,
        "api": settings.API_V1_PREFIX
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cpf_registry.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
