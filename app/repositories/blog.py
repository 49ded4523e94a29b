"""Blog post repository for database operations."""

from logging import getLogger
from typing import Any
from uuid import UUID

from sqlalchemy import asc, select

from app.configs import file_logger
from app.models.blog import BlogPostDB
from app.repositories.base import BaseRepository
from app.schemas.blog import BlogPostCreate, BlogPostUpdate

logger = file_logger(getLogger(__name__))


class BlogPostRepository(BaseRepository[BlogPostDB]):
    """
    Repository for BlogPost database operations.

    This class implements the repository pattern for blog posts, mapping the
    request schemas onto the stored document and applying partial updates.
    """

    model = BlogPostDB

    async def create(self, post: BlogPostCreate) -> BlogPostDB:
        """
        Create a new blog post in the database.

        Args:
            post: Validated creation schema

        Returns:
            BlogPostDB: Created post with its store-assigned ID

        Raises:
            DatabaseConnectionError: For database errors
        """
        db_post = BlogPostDB.model_validate(post.to_document())
        db_post = await self._add_and_refresh(db_post)
        logger.info(f"Created blog post {db_post.id}")
        return db_post

    async def get_all(self) -> list[BlogPostDB]:
        """
        Get every blog post, oldest first, ties broken by id.

        Returns:
            list[BlogPostDB]: List of posts
        """
        # pyrefly: ignore [bad-argument-type]
        statement = select(BlogPostDB).order_by(asc(BlogPostDB.created), asc(BlogPostDB.id))
        result = await self._execute(statement)
        return list(result.scalars().all())

    async def get_first(self) -> BlogPostDB | None:
        """
        Get the oldest blog post.

        Returns:
            BlogPostDB | None: Post if any exist, None otherwise
        """
        # pyrefly: ignore [bad-argument-type]
        statement = (
            select(BlogPostDB).order_by(asc(BlogPostDB.created), asc(BlogPostDB.id)).limit(1)
        )
        result = await self._execute(statement)
        return result.scalar_one_or_none()

    async def update(self, post_id: UUID | str, post_update: BlogPostUpdate) -> BlogPostDB | None:
        """
        Overwrite the supplied fields of a blog post.

        Fields absent from ``post_update`` keep their stored values. A partial
        author is merged into the stored author sub-document.

        Args:
            post_id: Post UUID
            post_update: Update schema with fields to update

        Returns:
            BlogPostDB | None: Updated post if found, None otherwise
        """
        db_post = await self.get_by_id(post_id)
        if not db_post:
            return None

        changes: dict[str, Any] = post_update.to_changes()
        if "author" in changes:
            # Assign a new mapping so the JSON column is flagged as modified
            changes["author"] = {**db_post.author, **changes["author"]}

        for key, value in changes.items():
            setattr(db_post, key, value)

        db_post = await self._add_and_refresh(db_post)
        logger.info(f"Updated fields {sorted(changes)} of blog post {db_post.id}")
        return db_post
