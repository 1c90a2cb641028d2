"""
Pytest configuration and fixtures for testing.

Database tests run against a fresh in-memory SQLite database per test,
seeded with the four-member dataset used throughout the suite:

    user1 (10, teamA), user2 (20, teamA), user3 (30, teamB), user4 (40, no team)
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Settings must point at SQLite before importing roster modules
os.environ.setdefault("DB_DRIVER", "sqlite+aiosqlite")
os.environ.setdefault("DB_NAME", ":memory:")
os.environ.setdefault("DB_USER", "test-user")
os.environ.setdefault("DB_PASSWORD", "test-password")

import pytest_asyncio  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from roster.models.member import Member  # noqa: E402
from roster.models.team import Team  # noqa: E402
from roster.repositories.member_repository import MemberRepository  # noqa: E402
from roster.repositories.team_repository import TeamRepository  # noqa: E402
from roster.storage.db import (  # noqa: E402
    build_engine,
    build_session_factory,
    init_db,
    session_scope,
)


@pytest_asyncio.fixture
async def engine():
    """
    Provides an engine bound to an empty in-memory database.

    Yields:
        AsyncEngine: Engine with the member and team tables created.
    """
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """
    Provides a session scoped to a single test.

    Yields:
        AsyncSession: Session on the test database.
    """
    async with session_scope(build_session_factory(engine)) as test_session:
        yield test_session


@pytest_asyncio.fixture
async def members(session):
    """
    Seeds the four-member dataset.

    Returns:
        list[Member]: user1..user4 in id order.
    """
    teams = TeamRepository(session)
    repo = MemberRepository(session)

    team_a = Team(name="teamA")
    team_b = Team(name="teamB")
    await teams.save(team_a)
    await teams.save(team_b)

    seeded = []
    for username, age, team in [
        ("user1", 10, team_a),
        ("user2", 20, team_a),
        ("user3", 30, team_b),
        ("user4", 40, None),
    ]:
        member = Member(
            username=username, age=age, team_id=team.id if team else None
        )
        await repo.save(member)
        seeded.append(member)
    return seeded


@pytest.fixture
def repo(session, members):
    """Provides a MemberRepository over the seeded dataset."""
    return MemberRepository(session)


@pytest.fixture
def statements(engine, members):
    """
    Records SELECT statements sent to the test database after seeding.

    Returns:
        list[str]: SQL of every SELECT issued, in order.
    """
    captured: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().lower().startswith("select"):
            captured.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", record)
    yield captured
    event.remove(engine.sync_engine, "before_cursor_execute", record)


@pytest.fixture
def mock_session():
    """
    Provides a mock AsyncSession for testing.

    Returns:
        AsyncMock: Mocked database session
    """
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.exec = AsyncMock()
    session.get = AsyncMock()
    return session
