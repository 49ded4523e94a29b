from app.schemas.blog import (
    Author,
    AuthorUpdate,
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
)
from app.schemas.health import HealthCheckResponse

__all__ = [
    "Author",
    "AuthorUpdate",
    "BlogPostCreate",
    "BlogPostResponse",
    "BlogPostUpdate",
    "HealthCheckResponse",
]
