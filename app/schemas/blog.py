"""
Blog post schemas.

This module defines the request and response models of the posts resource.
Request models validate the author sub-document and required text fields
before anything reaches the database; the response model is the flattened
external representation. Accepted text is stored exactly as submitted.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

from app.configs.settings import MAX_CONTENT_LENGTH, MAX_NAME_LENGTH, MAX_TITLE_LENGTH


def not_blank(value: str) -> str:
    """Reject whitespace-only text, returning accepted text unchanged."""
    if not value.strip():
        msg = "must not be blank"
        raise ValueError(msg)
    return value


Name = Annotated[
    str,
    StringConstraints(strict=True, min_length=1, max_length=MAX_NAME_LENGTH),
    AfterValidator(not_blank),
]
Title = Annotated[
    str,
    StringConstraints(strict=True, min_length=1, max_length=MAX_TITLE_LENGTH),
    AfterValidator(not_blank),
]
Content = Annotated[
    str,
    StringConstraints(strict=True, min_length=1, max_length=MAX_CONTENT_LENGTH),
    AfterValidator(not_blank),
]


class Author(BaseModel):
    """Author sub-document (both names required)."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Name = Field(alias="firstName", examples=["Mason"])
    last_name: Name = Field(alias="lastName", examples=["Tang"])


class AuthorUpdate(BaseModel):
    """Author sub-document for partial updates (any subset of names)."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Name | None = Field(default=None, alias="firstName")
    last_name: Name | None = Field(default=None, alias="lastName")


class BlogPostCreate(BaseModel):
    """Blog post creation model (request body, excludes store-assigned fields)."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Ten Days in Lisbon",
                "content": "Lisbon is a city of hills and light...",
                "author": {"firstName": "Mason", "lastName": "Tang"},
            },
        },
    )

    title: Title = Field(..., description="Post title")
    content: Content = Field(..., description="Post content")
    author: Author = Field(..., description="Post author")

    def to_document(self) -> dict:
        """Return the persisted document shape."""
        return {
            "title": self.title,
            "content": self.content,
            "author": self.author.model_dump(by_alias=True),
        }


class BlogPostUpdate(BaseModel):
    """
    Blog post update model (all fields optional).

    Only the fields present in the request are applied. ``id`` may be echoed
    back by clients but must match the path.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "fire",
                "content": "alot of stuff to read",
                "author": {"firstName": "Mason", "lastName": "Tang"},
            },
        },
    )

    id: str | None = Field(default=None, description="Must equal the path id when sent")
    title: Title | None = None
    content: Content | None = None
    author: AuthorUpdate | None = None

    def to_changes(self) -> dict:
        """
        Return the supplied fields in persisted document shape.

        Fields that were not sent, or sent as ``null``, are left out. The
        author is returned as a partial mapping to be merged into the stored
        sub-document.
        """
        changes = self.model_dump(
            include={"title", "content"},
            exclude_unset=True,
            exclude_none=True,
        )
        if self.author is not None:
            author = self.author.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
            if author:
                changes["author"] = author
        return changes


class BlogPostResponse(BaseModel):
    """Blog post external representation."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Ten Days in Lisbon",
                "content": "Lisbon is a city of hills and light...",
                "author": "Mason Tang",
            },
        },
    )

    id: str
    title: str
    content: str
    author: str
