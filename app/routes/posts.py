# app/routes/posts.py

"""
Blog Post Routes.

Provides CRUD endpoints for blog posts with standardized documentation.

Summary
-------
Endpoints include:
  - List posts
  - Get post by id
  - Create post
  - Update post (partial)
  - Delete post

Dependencies
------------
  - `RepoDep`: Repository bound to a per-request session. The session commits
    when the handler returns, before the response is sent.

Representation
--------------
Stored posts carry a nested `author` document. Responses flatten it into a
single `"<firstName> <lastName>"` string and expose the primary key as a
string `id`.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from app.configs import file_logger
from app.db import get_session
from app.errors import IdMismatchError, RecordNotFoundError
from app.models import BlogPostDB
from app.repositories import BlogPostRepository, parse_record_id
from app.schemas import BlogPostCreate, BlogPostResponse, BlogPostUpdate

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {
        "application/json": {"example": {"detail": "BlogPost with ID <id> not found"}},
    },
}
VALIDATION_RESPONSE = {
    "description": "Validation failed",
    "content": {
        "application/json": {
            "example": {
                "detail": "Validation failed",
                "errors": [
                    {
                        "field": "author.lastName",
                        "message": "Field required",
                        "type": "missing",
                    },
                ],
            },
        },
    },
}


def db_post_to_response(db_post: BlogPostDB) -> BlogPostResponse:
    """
    Convert a `BlogPostDB` instance to its external representation.

    Parameters
    ----------
    db_post : BlogPostDB
        Database blog post entity.

    Returns
    -------
    BlogPostResponse
        Response model with the author flattened to a display name.
    """
    try:
        response = BlogPostResponse(
            id=str(db_post.id),
            title=db_post.title,
            content=db_post.content,
            author=db_post.author_name,
        )
    except (ValidationError, KeyError, TypeError) as e:
        mssg = f"Stored blog post {db_post.id} cannot be represented: {e}"
        logger.exception("Error converting blog post to response model")
        raise ValueError(mssg) from e

    return response


def get_post_repository(
    session: Annotated[AsyncSession, Depends(get_session, scope="function")],
) -> BlogPostRepository:
    """
    Resolve the `BlogPostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogPostRepository
        Repository instance bound to the session.
    """
    return BlogPostRepository(session)


RepoDep = Annotated[BlogPostRepository, Depends(get_post_repository)]


def same_record_id(path_id: str, body_id: str) -> bool:
    """Whether two ids name the same record, comparing raw text when either is not a UUID."""
    parsed_path, parsed_body = parse_record_id(path_id), parse_record_id(body_id)
    if parsed_path is None or parsed_body is None:
        return path_id == body_id
    return parsed_path == parsed_body


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[BlogPostResponse],
    summary="List blog posts",
    description="Retrieve every blog post, oldest first.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "title": "Ten Days in Lisbon",
                            "content": "Lisbon is a city of hills and light...",
                            "author": "Mason Tang",
                        },
                    ],
                },
            },
        },
    },
    operation_id="posts_list",
)
async def list_posts(repo: RepoDep) -> list[BlogPostResponse]:
    """
    List all blog posts.

    Parameters
    ----------
    repo : BlogPostRepository
        Repository dependency.

    Returns
    -------
    list[BlogPostResponse]
        Every stored post; an empty list when there are none.
    """
    db_posts = await repo.get_all()
    return [db_post_to_response(db_post) for db_post in db_posts]


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=BlogPostResponse,
    summary="Get blog post by ID",
    description="Retrieve a single blog post by its ID.",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="posts_get",
)
async def get_post(post_id: str, repo: RepoDep) -> BlogPostResponse:
    """
    Get a blog post by ID.

    Raises
    ------
    RecordNotFoundError
        If no post has this ID.
    """
    db_post = await repo.get_or_raise(post_id)
    return db_post_to_response(db_post)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogPostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a new blog post. Title, content and both author names are required.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "title": "Ten Days in Lisbon",
                        "content": "Lisbon is a city of hills and light...",
                        "author": "Mason Tang",
                    },
                },
            },
        },
        422: VALIDATION_RESPONSE,
    },
    operation_id="posts_create",
)
async def create_post(
    post: Annotated[
        BlogPostCreate,
        Body(
            examples=[
                {
                    "title": "Ten Days in Lisbon",
                    "content": "Lisbon is a city of hills and light...",
                    "author": {"firstName": "Mason", "lastName": "Tang"},
                },
            ],
        ),
    ],
    repo: RepoDep,
) -> BlogPostResponse:
    """
    Create a new blog post.

    Parameters
    ----------
    post : BlogPostCreate
        Blog post input payload.
    repo : BlogPostRepository
        Repository dependency.

    Returns
    -------
    BlogPostResponse
        Created post, including its store-assigned `id`.

    Examples
    --------
    Request
        POST /posts
        {"title": "T", "content": "C", "author": {"firstName": "Mason", "lastName": "Tang"}}
    Response
        201 Created
        {"id": "...", "title": "T", "content": "C", "author": "Mason Tang"}
    """
    db_post = await repo.create(post)
    return db_post_to_response(db_post)


@router.put(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Update blog post",
    description="Overwrite the supplied fields of a blog post. Other fields are kept.",
    responses={
        204: {"description": "No Content"},
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Request path id (<a>) and request body id (<b>) must match",
                    },
                },
            },
        },
        404: NOT_FOUND_RESPONSE,
        422: VALIDATION_RESPONSE,
    },
    operation_id="posts_update",
)
async def update_post(
    post_id: str,
    post_update: Annotated[
        BlogPostUpdate,
        Body(
            examples=[
                {
                    "title": "fire",
                    "content": "alot of stuff to read",
                    "author": {"firstName": "Mason", "lastName": "Tang"},
                },
            ],
        ),
    ],
    repo: RepoDep,
) -> Response:
    """
    Update a blog post.

    Parameters
    ----------
    post_id : str
        Blog post identifier.
    post_update : BlogPostUpdate
        Fields to overwrite. An `id` may be included but must equal `post_id`.
    repo : BlogPostRepository
        Repository dependency.

    Returns
    -------
    Response
        Empty 204 response.

    Raises
    ------
    IdMismatchError
        If the body `id` differs from the path `post_id`.
    RecordNotFoundError
        If no post has this ID.
    """
    if post_update.id is not None and not same_record_id(post_id, post_update.id):
        raise IdMismatchError(path_id=post_id, body_id=post_update.id)

    db_post = await repo.update(post_id, post_update)
    if not db_post:
        raise RecordNotFoundError(detail=f"BlogPost with ID {post_id} not found")
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.delete(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete blog post",
    description="Delete a blog post by its ID.",
    responses={
        204: {"description": "No Content"},
        404: NOT_FOUND_RESPONSE,
    },
    operation_id="posts_delete",
)
async def delete_post(post_id: str, repo: RepoDep) -> Response:
    """
    Delete a blog post by ID.

    Raises
    ------
    RecordNotFoundError
        If no post has this ID, including one that was already deleted.
    """
    deleted = await repo.delete(post_id)
    if not deleted:
        raise RecordNotFoundError(detail=f"BlogPost with ID {post_id} not found")
    logger.info(f"Deleted blog post {post_id}")
    return Response(status_code=HTTP_204_NO_CONTENT)
