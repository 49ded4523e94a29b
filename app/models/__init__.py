"""Database models for the application."""

from app.models.blog import BlogPostDB, author_display_name

__all__ = ["BlogPostDB", "author_display_name"]
