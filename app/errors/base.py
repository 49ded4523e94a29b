from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import DEFAULT_ERROR_MESSAGE
from app.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Client errors are answered with their own detail. Server errors are
    logged with their detail and traceback, and answered with the generic
    message only.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        # Default values
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = DEFAULT_ERROR_MESSAGE

        # Extract from custom exception if available
        if hasattr(exc, "status_code"):
            status_code = exc.status_code
        if hasattr(exc, "detail"):
            detail = exc.detail

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"{detail} for ip: {host(request)} for endpoint {request.url.path}",
                exc_info=exc,
            )
            return ORJSONResponse(
                content={"detail": DEFAULT_ERROR_MESSAGE},
                status_code=status_code,
            )

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        # Build response content with msg and any additional exception attributes
        content = {"detail": detail}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in ("status_code", "detail")},
        )

        return ORJSONResponse(content=content, status_code=status_code)

    return handler
