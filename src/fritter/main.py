"""Main entry point for the Fritter application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from fritter.api.v1 import (
    feed_router,
    freets_router,
    moderation_router,
    votes_router,
)
from fritter.core.errors import (
    ConflictError,
    ContentTooLongError,
    FritterError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from fritter.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Fritter API",
    description="Freet feeds, votes, reports and community audits",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(freets_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")

# Most specific class first; the first isinstance match wins.
_ERROR_STATUS: tuple[tuple[type[FritterError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ContentTooLongError, status.HTTP_413_CONTENT_TOO_LARGE),
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
)


def status_for_error(exc: FritterError) -> int:
    """Return the HTTP status code for a domain error."""
    for error_cls, code in _ERROR_STATUS:
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(FritterError)
async def handle_domain_error(request: Request, exc: FritterError) -> JSONResponse:
    """Translate domain errors raised by the services into JSON responses."""
    code = status_for_error(exc)
    logger.debug("%s %s -> %d: %s", request.method, request.url.path, code, exc.detail)
    return JSONResponse(status_code=code, content={"detail": exc.detail})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Fritter API",
        "version": "1.0.0",
        "description": "Freet feeds, votes, reports and community audits",
        "docs": "/docs",
        "redoc": "/redoc"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fritter.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
