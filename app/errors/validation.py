"""Custom validation error handling for FastAPI."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_422_UNPROCESSABLE_CONTENT

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class IdMismatchError(BaseAppError):
    """Raised when the id in a request body disagrees with the id in the path."""

    def __init__(self, path_id: str, body_id: str) -> None:
        super().__init__(
            detail=f"Request path id ({path_id}) and request body id ({body_id}) must match",
            status_code=HTTP_400_BAD_REQUEST,
        )


request_exception_handler = create_exception_handler(logger)


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors with cleaner response format.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    # Format errors for cleaner response
    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),  # Skip 'body'
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "input" in error:
            formatted_error["input"] = error["input"]
        # Convert non-serializable values (like ValueError) to strings
        if "ctx" in error:
            formatted_error["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in error["ctx"].items()
            }
        formatted_errors.append(formatted_error)

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: "
        f"{formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )
