from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.group import Group, GroupMember, GroupRole
from app.models.user import UserResponse

COLLECTIONS = ("users", "groups", "expenses", "settlements")


def _cursor(docs):
    """Mock motor cursor supporting sort/limit chaining and to_list."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs))
    return cursor


def make_collection():
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.update_one = AsyncMock()
    collection.find.return_value = _cursor([])
    return collection


@pytest.fixture
def make_cursor():
    return _cursor


@pytest.fixture
def mock_db():
    """Mock MongoDB database: db["users"], db["groups"], ... are separate mocks."""
    db = MagicMock()
    collections = {name: make_collection() for name in COLLECTIONS}
    db.__getitem__.side_effect = lambda name: collections[name]
    db.collections = collections
    return db


@pytest.fixture
def alice():
    now = datetime.now(timezone.utc)
    return UserResponse(
        id=str(ObjectId()),
        name="Alice",
        email="alice@example.com",
        created_at=now,
        updated_at=now
    )


@pytest.fixture
def bob_id():
    return str(ObjectId())


@pytest.fixture
def carol_id():
    return str(ObjectId())


@pytest.fixture
def group(alice, bob_id, carol_id):
    """Trip group with Alice (admin), Bob and Carol."""
    return Group(
        name="Trip",
        description="Weekend away",
        created_by=alice.id,
        members=[
            GroupMember(user_id=alice.id, role=GroupRole.ADMIN),
            GroupMember(user_id=bob_id),
            GroupMember(user_id=carol_id),
        ]
    )


@pytest_asyncio.fixture
async def client(mock_db, alice):
    """HTTP client against the app with the database and current user overridden."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = lambda: alice
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
