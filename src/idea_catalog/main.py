# src/idea_catalog/main.py
"""Main entry point for the Idea Catalog application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from idea_catalog.api.v1 import (
    comments_router,
    ideas_router,
    metrics_router,
    projects_router,
    users_router,
)
from idea_catalog.core.errors import register_exception_handlers
from idea_catalog.core.logging import configure_logging
from idea_catalog.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Curated project ideas with tiered access, threaded discussion and project links",
    version=settings.app_version,
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

# Every failure leaves as the JSON error envelope
register_exception_handlers(app)

# Include API routers
app.include_router(ideas_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(projects_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(metrics_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Curated project ideas with tiered access",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("idea_catalog.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
