"""
FastAPI application entry point for the Survey Analytics API.

Configures logging, CORS, request logging, domain error handling, registers
the API routers under /api, and manages the database pool lifecycle.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from survey_analytics import __version__
from survey_analytics.api import api_router
from survey_analytics.core.config import get_settings
from survey_analytics.core.database import close_db, init_db
from survey_analytics.core.exceptions import SurveyAnalyticsError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize database connection pool
    On shutdown:
        - Close database connection pool
    """
    logger.info("Survey Analytics API starting")
    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except Exception as e:
        # Requests retry the lazy pool init through get_db_pool()
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Survey Analytics API shutting down")
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


app = FastAPI(
    title="Survey Analytics API",
    version=__version__,
    description=(
        "Aggregate analytics over verified survey responses: response volume "
        "over time, respondent breakdowns and per-question answer "
        "distributions, filterable by date range and arbitrary dimensions."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {duration_ms:.0f}ms")
    return response


@app.exception_handler(SurveyAnalyticsError)
async def handle_domain_error(request: Request, exc: SurveyAnalyticsError) -> JSONResponse:
    """Map domain errors onto their HTTP status with a ``detail`` message."""
    if exc.status_code >= 500:
        logger.error(f"Unhandled domain error on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'ok'
    """
    return {"status": "ok"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "Survey Analytics API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "survey_analytics.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
