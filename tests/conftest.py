# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before app settings are imported anywhere
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "testing"

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from faker import Faker
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.configs import settings
from app.db import Database
from app.main import create_app
from app.models import BlogPostDB
from app.repositories import BlogPostRepository

SEED_COUNT = 11

fake = Faker()


def generate_post_data() -> dict[str, Any]:
    """Build a random blog post payload in wire shape."""
    return {
        "title": fake.sentence(nb_words=4),
        "author": {
            "firstName": fake.first_name(),
            "lastName": fake.last_name(),
        },
        "content": fake.paragraph(),
    }


@pytest.fixture
def post_data() -> dict[str, Any]:
    """Random blog post payload."""
    return generate_post_data()


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """Fresh in-memory database, dropped and closed after the test."""
    db = Database(settings.TEST_DATABASE_URL)
    db.connect()
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest.fixture
async def seeded_posts(database: Database) -> list[BlogPostDB]:
    """Seed the database with blog posts."""
    async with database.transaction() as session:
        repo = BlogPostRepository(session)
        return await repo.insert_many([generate_post_data() for _ in range(SEED_COUNT)])


@pytest.fixture
def test_app(database: Database) -> FastAPI:
    """Application wired to the test database."""
    application = create_app(database_url=settings.TEST_DATABASE_URL)
    application.state.database = database
    return application


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=test_app),
    ) as ac:
        yield ac


@pytest.fixture
def fetch_post(database: Database) -> Callable[[str], Any]:
    """Look a post up by ID in a separate session, like an outside reader would."""

    async def fetch(post_id: str) -> BlogPostDB | None:
        async with database.transaction() as session:
            return await BlogPostRepository(session).get_by_id(post_id)

    return fetch


@pytest.fixture
def count_posts(database: Database) -> Callable[[], Any]:
    """Count stored posts in a separate session."""

    async def count() -> int:
        async with database.transaction() as session:
            return await BlogPostRepository(session).count()

    return count
