"""Base repository for database operations."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import DatabaseConnectionError, RecordNotFoundError


def parse_record_id(record_id: UUID | str) -> UUID | None:
    """
    Coerce an external identifier into a record UUID.

    Args:
        record_id: UUID or its string form

    Returns:
        UUID | None: Parsed UUID, or None if the value is not a valid UUID
    """
    if isinstance(record_id, UUID):
        return record_id
    try:
        return UUID(record_id)
    except (TypeError, ValueError, AttributeError):
        return None


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories. Identifiers may be
    given as UUIDs or strings; a string that is not a UUID matches nothing.
    Driver failures are raised as ``DatabaseConnectionError``.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def model_name(self) -> str:
        return self.model.__name__.removesuffix("DB")

    async def insert_many(self, documents: Sequence[dict[str, Any]]) -> list[ModelT]:
        """
        Insert several records at once.

        Args:
            documents: Field mappings for the new records

        Returns:
            list[ModelT]: Created records in insertion order
        """
        records = [self.model.model_validate(document) for document in documents]
        try:
            self.session.add_all(records)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to insert records: {e}") from e
        return records

    async def get_by_id(self, record_id: UUID | str) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        if (parsed_id := parse_record_id(record_id)) is None:
            return None
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == parsed_id)
        result = await self._execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: UUID | str) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Args:
            record_id: Record UUID

        Returns:
            ModelT: Record if found

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(
                detail=f"{self.model_name} with ID {record_id} not found",
            )
        return record

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self.model)
        result = await self._execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def delete(self, record_id: UUID | str) -> bool:
        """
        Delete a record by ID.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record was deleted, False if not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            return False

        try:
            await self.session.delete(record)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to delete record: {e}") from e
        return True

    async def _execute(self, statement: Any) -> Any:
        """Execute a statement, translating driver errors."""
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to query records: {e}") from e

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DatabaseConnectionError: For database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e
        return record
