# app/main.py

"""Blog Posts Backend - CRUD API for blog posts."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from app.configs import settings
from app.errors import (
    DatabaseError,
    IdMismatchError,
    database_exception_handler,
    request_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import posts_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

routes = [
    posts_router,
]

errors = [
    (DatabaseError, database_exception_handler),
    (IdMismatchError, request_exception_handler),
    (RequestValidationError, validation_exception_handler),
]


async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint with database status.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Health status including database connectivity.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "2025-01-01 00:00:00",
         "database": "connected"}
    """
    database = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()

    response = HealthCheckResponse(
        version=request.app.version,
        status="ok" if connected else "degraded",
        timestamp=today_str(),
        database="connected" if connected else "unavailable",
    )
    return ORJSONResponse(response.model_dump())


def create_app(database_url: str | None = None) -> FastAPI:
    """
    Build the application.

    Parameters
    ----------
    database_url : str | None
        Database the lifespan opens on startup. Defaults to
        ``settings.DATABASE_URL``.

    Returns
    -------
    FastAPI
        Configured application with routes, middleware and error handlers.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="CRUD API for blog posts",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        swagger_ui_parameters={
            "docExpansion": "none",
            "operationsSorter": "method",
        },
    )
    app.state.database_url = database_url or settings.DATABASE_URL
    app.state.database = None

    configure_cors(app)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    _ = [app.include_router(router) for router in routes]
    _ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

    app.add_api_route(
        "/health",
        health_check,
        methods=["GET"],
        tags=["🩺 Health"],
        summary="Health check endpoint",
        response_model=HealthCheckResponse,
        response_class=ORJSONResponse,
        responses={
            200: {
                "content": {
                    "application/json": {
                        "example": {
                            "version": "1.0.0",
                            "status": "ok",
                            "timestamp": "2025-01-01 00:00:00",
                            "database": "connected",
                        },
                    },
                },
            },
        },
        operation_id="health_check",
    )

    return app


app = create_app()
