# tests/repositories/test_blog_repository.py
"""Tests for app/repositories/blog.py module."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.db import Database
from app.errors import DatabaseConnectionError, RecordNotFoundError
from app.models import BlogPostDB
from app.repositories import BlogPostRepository, parse_record_id
from app.schemas import BlogPostCreate, BlogPostUpdate
from tests.conftest import SEED_COUNT, generate_post_data


class TestBlogPostRepository:
    """Repository operations against a live test database."""

    @pytest.mark.asyncio
    async def test_insert_many_and_count(self, database: Database) -> None:
        async with database.transaction() as session:
            repo = BlogPostRepository(session)
            inserted = await repo.insert_many([generate_post_data() for _ in range(3)])
            assert len(inserted) == 3
            assert len({post.id for post in inserted}) == 3

        async with database.transaction() as session:
            assert await BlogPostRepository(session).count() == 3

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, database: Database) -> None:
        payload = BlogPostCreate.model_validate(generate_post_data())

        async with database.transaction() as session:
            db_post = await BlogPostRepository(session).create(payload)

        assert db_post.id is not None
        assert db_post.created is not None
        assert db_post.author == {
            "firstName": payload.author.first_name,
            "lastName": payload.author.last_name,
        }

    @pytest.mark.asyncio
    async def test_get_all_returns_every_post(
        self,
        database: Database,
        seeded_posts: list[BlogPostDB],
    ) -> None:
        async with database.transaction() as session:
            posts = await BlogPostRepository(session).get_all()

        assert len(posts) == SEED_COUNT
        assert {post.id for post in posts} == {post.id for post in seeded_posts}

    @pytest.mark.asyncio
    async def test_get_first(self, database: Database, seeded_posts: list[BlogPostDB]) -> None:
        async with database.transaction() as session:
            first = await BlogPostRepository(session).get_first()

        assert first is not None
        assert first.id in {post.id for post in seeded_posts}

    @pytest.mark.asyncio
    async def test_get_first_on_empty_store(self, database: Database) -> None:
        async with database.transaction() as session:
            assert await BlogPostRepository(session).get_first() is None

    @pytest.mark.asyncio
    async def test_get_by_id_accepts_uuid_and_string(
        self,
        database: Database,
        seeded_posts: list[BlogPostDB],
    ) -> None:
        target = seeded_posts[5]

        async with database.transaction() as session:
            repo = BlogPostRepository(session)
            by_uuid = await repo.get_by_id(target.id)
            by_str = await repo.get_by_id(str(target.id))
            missing = await repo.get_by_id(uuid4())
            malformed = await repo.get_by_id("abc")

        assert by_uuid is not None
        assert by_str is not None
        assert by_uuid.id == by_str.id == target.id
        assert missing is None
        assert malformed is None

    @pytest.mark.asyncio
    async def test_get_or_raise(self, database: Database) -> None:
        missing_id = uuid4()

        async with database.transaction() as session:
            with pytest.raises(RecordNotFoundError) as exc_info:
                await BlogPostRepository(session).get_or_raise(missing_id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == f"BlogPost with ID {missing_id} not found"

    @pytest.mark.asyncio
    async def test_update_overwrites_only_supplied_fields(
        self,
        database: Database,
        seeded_posts: list[BlogPostDB],
    ) -> None:
        original = seeded_posts[0]
        changes = BlogPostUpdate.model_validate(
            {"content": "New content", "author": {"lastName": "Tang"}},
        )

        async with database.transaction() as session:
            updated = await BlogPostRepository(session).update(original.id, changes)

        assert updated is not None
        assert updated.title == original.title
        assert updated.content == "New content"
        assert updated.author == {"firstName": original.author["firstName"], "lastName": "Tang"}

        async with database.transaction() as session:
            reloaded = await BlogPostRepository(session).get_by_id(original.id)

        assert reloaded.author == updated.author
        assert reloaded.content == "New content"

    @pytest.mark.asyncio
    async def test_update_missing_post_returns_none(self, database: Database) -> None:
        changes = BlogPostUpdate.model_validate({"title": "fire"})

        async with database.transaction() as session:
            assert await BlogPostRepository(session).update(uuid4(), changes) is None

    @pytest.mark.asyncio
    async def test_delete(self, database: Database, seeded_posts: list[BlogPostDB]) -> None:
        target = seeded_posts[0]

        async with database.transaction() as session:
            repo = BlogPostRepository(session)
            assert await repo.delete(target.id) is True
            assert await repo.delete(target.id) is False
            assert await repo.delete("not-a-uuid") is False

        async with database.transaction() as session:
            assert await BlogPostRepository(session).count() == SEED_COUNT - 1


class TestDriverErrors:
    """Driver failures are translated into DatabaseConnectionError."""

    @pytest.mark.asyncio
    async def test_query_error_is_translated(self) -> None:
        session = MagicMock()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

        with pytest.raises(DatabaseConnectionError):
            await BlogPostRepository(session).get_all()

    @pytest.mark.asyncio
    async def test_save_error_rolls_back(self) -> None:
        session = MagicMock()
        session.flush = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))
        session.rollback = AsyncMock()

        with pytest.raises(DatabaseConnectionError):
            await BlogPostRepository(session).create(
                BlogPostCreate.model_validate(generate_post_data()),
            )

        session.rollback.assert_awaited_once()


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ("550e8400-e29b-41d4-a716-446655440000", True),
        ("550e8400e29b41d4a716446655440000", True),
        ("not-a-uuid", False),
        ("", False),
    ],
)
def test_parse_record_id(value: str, valid: bool) -> None:
    assert (parse_record_id(value) is not None) is valid


def test_parse_record_id_passes_uuid_through() -> None:
    record_id = uuid4()
    assert parse_record_id(record_id) is record_id
