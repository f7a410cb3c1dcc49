"""Tests for the YouTube Celery task bodies."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.core.infrastructure.database import session as session_module
from src.modules.youtube import tasks

pytestmark = pytest.mark.anyio


@pytest.fixture
def db_session(monkeypatch):
    session = AsyncMock()
    session.execute.return_value = MagicMock(rowcount=2)

    @asynccontextmanager
    async def fake_session():
        yield session

    monkeypatch.setattr(session_module, "get_async_session", fake_session)
    return session


async def test_disable_feed_commits(db_session):
    await tasks._disable_feed_async("C1", "Unknown Channel")

    db_session.execute.assert_awaited_once()
    db_session.commit.assert_awaited_once()


async def test_disable_feed_commit_failure_is_not_raised(db_session):
    db_session.commit.side_effect = OperationalError(
        "COMMIT", {}, Exception("server closed the connection")
    )

    await tasks._disable_feed_async("C1", "Unknown Channel")

    db_session.commit.assert_awaited_once()


async def test_disable_feed_store_failure_is_rolled_back(db_session):
    db_session.execute.side_effect = OperationalError(
        "UPDATE", {}, Exception("server closed the connection")
    )

    await tasks._disable_feed_async("C1", "Unknown Channel")

    db_session.rollback.assert_awaited_once()
