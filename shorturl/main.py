"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Application metadata
- Startup (logging, optional table creation)

Run with `shorturl` (console script) or `uvicorn shorturl.main:app`.
"""

import logging

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shorturl import __version__
from shorturl.api import endpoints
from shorturl.core.setting import settings
from shorturl.db.session import create_tables, get_session, ping
from shorturl.middleware.logging import add_access_log, configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="URL Shortener Service",
    description="Maps long URLs to sequential numeric short codes and redirects back",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

add_access_log(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint describing the service.
    """
    return {
        "message": "URL Shortener Service",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    Health check endpoint for monitoring.

    Returns 503 when the database cannot be reached.
    """
    try:
        await ping(session)
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Health check failed: {e}")
        return JSONResponse(
            {"status": "unhealthy"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["URL Shortener"])


@app.on_event("startup")
async def startup_event():
    """Initialize logging and, for local setups, the schema."""
    configure_logging(settings.LOG_LEVEL, settings.ACCESS_LOG)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()
        logger.info("Database tables ensured")


def run() -> None:
    """Console entry point: serve the app on HOST:PORT."""
    configure_logging(settings.LOG_LEVEL, settings.ACCESS_LOG)
    logger.info(f"Listening on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
