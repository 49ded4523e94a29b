from app.errors.base import BaseAppError, create_exception_handler
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.validation import (
    IdMismatchError,
    request_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "create_exception_handler",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "RecordNotFoundError",
    "database_exception_handler",
    "IdMismatchError",
    "request_exception_handler",
    "validation_exception_handler",
]
