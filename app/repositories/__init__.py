"""Repository layer for database operations."""

from app.repositories.base import BaseRepository, parse_record_id
from app.repositories.blog import BlogPostRepository

__all__ = ["BaseRepository", "BlogPostRepository", "parse_record_id"]
