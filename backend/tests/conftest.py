"""Pytest configuration and shared fixtures for API and page tests."""

import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test DB and flags before app imports so config/engine use them
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'bp_tracker_test.db'}",
)
os.environ.setdefault("ENABLE_DEV_ENDPOINTS", "true")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from bp_tracker.db.base import Base
from bp_tracker.db.session import engine, init_db
from bp_tracker.main import app
from bp_tracker.web.page import load_index


async def _delete_all():
    """Delete all rows in reverse dependency order so tests start clean."""
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest_asyncio.fixture
async def clean_db():
    """Create tables if needed and empty them."""
    await init_db()
    await _delete_all()
    yield


@pytest_asyncio.fixture
async def client(clean_db):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def page():
    """Fresh tracker page document."""
    return load_index()


@pytest.fixture
def session_values():
    """Build a form body with the same measurement three times."""

    def _build(s: int, d: int, p: int) -> dict:
        body = {}
        for i in (1, 2, 3):
            body[f"systolic{i}"] = s
            body[f"diastolic{i}"] = d
            body[f"pulse{i}"] = p
        return body

    return _build
