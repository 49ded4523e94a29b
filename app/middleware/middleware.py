# app/middleware/middleware.py
"""
Middleware components for the Blog Posts application.

This module contains middleware for security headers, request logging and
CORS handling. It also contains the lifespan event handler that opens the
database on startup and closes it on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import file_logger, settings
from app.db import Database
from app.utils.helpers import get_summary, host, time_taken

# --- Logging Configuration ---
basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = file_logger(getLogger("rich"))

install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Open the database on startup and close it on shutdown."""
    # Startup
    start_time = perf_counter()
    logger.info(f"Starting {app.title}...")

    database = Database(app.state.database_url, echo=settings.DATABASE_ECHO)
    try:
        if settings.LOG_TO_FILE:
            logger.info(f"Logging to file {settings.LOG_FILE} enabled.")

        database.connect()
        await database.create_all()
        app.state.database = database

        logger.info(f"Services initialized successfully in {time_taken(start_time)}")
        logger.info("Services:")
        logger.info(f"  - Backend API: http://{settings.HOST}:{settings.PORT}")
        logger.info(f"  - API Documentation: http://{settings.HOST}:{settings.PORT}/docs")
        logger.info(f"  - Health Check: http://{settings.HOST}:{settings.PORT}/health")

    except Exception:
        logger.exception("Failed to initialize services")
        await database.close()
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {app.title}...")

    try:
        await database.close()
        app.state.database = None
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Add production origins if specified
    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"in {duration:.2f}s",
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
