"""
Shared test fixtures for Townsquare.
"""
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment before importing app modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")
os.environ.setdefault("TWITTER_KEY", "test-consumer-key")
os.environ.setdefault("TWITTER_SECRET", "test-consumer-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from townsquare.models.user import User  # noqa: E402


@pytest.fixture
def mock_db_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_result():
    """Build a mock execute() result holding `value`."""
    def build(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        result.scalars.return_value.all.return_value = value if isinstance(value, list) else [value]
        return result
    return build


@pytest.fixture
def alice():
    return User(
        id="u-alice",
        twitter_uid="1001",
        username="alice",
        name="Alice Liddell",
        email="Alice@Example.com",
        admin=False,
    )


@pytest.fixture
def admin_bob():
    return User(
        id="u-bob",
        twitter_uid="1002",
        username="bob",
        name="Bob",
        email="bob@example.com",
        admin=True,
    )
