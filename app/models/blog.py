"""Blog post database model using SQLModel."""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH

# JSONB on PostgreSQL, plain JSON everywhere else
AuthorDocument = JSON().with_variant(JSONB(), "postgresql")


def author_display_name(author: dict[str, Any]) -> str:
    """
    Build the display name of an author sub-document.

    Args:
        author: Mapping with ``firstName`` and ``lastName`` keys

    Returns:
        str: ``"<firstName> <lastName>"``
    """
    return f"{author['firstName']} {author['lastName']}"


class BlogPostDB(SQLModel, table=True):
    """
    Blog post database model.

    This model represents the posts table in the database. The author is
    stored as a nested ``{"firstName", "lastName"}`` document.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog post ID",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Post title",
    )
    content: str = Field(
        sa_column=Column(String(MAX_CONTENT_LENGTH), nullable=False),
        description="Post content",
    )
    author: dict[str, str] = Field(
        sa_column=Column(AuthorDocument, nullable=False),
        description="Author sub-document with firstName and lastName",
    )

    # Timestamps (timezone-aware)
    created: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Ten Days in Lisbon",
                "content": "Lisbon is a city of hills and light...",
                "author": {"firstName": "Mason", "lastName": "Tang"},
            },
        },
    )

    @property
    def author_name(self) -> str:
        """Author display name."""
        return author_display_name(self.author)
