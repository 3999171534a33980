from datetime import datetime, timezone

import pytest
from bson import ObjectId

from app.core.security import verify_password
from app.models.user import UserCreate
from app.repositories.user_repo import UserRepository


@pytest.mark.asyncio
async def test_create_user_hashes_password(mock_db):
    users = mock_db.collections["users"]

    user = await UserRepository(mock_db).create_user(
        UserCreate(name="Dana", email="dana@example.com", password="SecurePassword123")
    )

    doc = users.insert_one.call_args[0][0]
    assert doc["password_hash"] != "SecurePassword123"
    assert verify_password("SecurePassword123", doc["password_hash"])
    assert user.id == users.insert_one.return_value.inserted_id
    assert not user.is_placeholder


@pytest.mark.asyncio
async def test_create_placeholder_without_email_omits_field(mock_db):
    users = mock_db.collections["users"]

    user = await UserRepository(mock_db).create_placeholder("Eve", invited_by="user-1")

    doc = users.insert_one.call_args[0][0]
    assert "email" not in doc
    assert doc["invited_by"] == "user-1"
    assert user.is_placeholder


@pytest.mark.asyncio
async def test_get_user_by_id_invalid_id(mock_db):
    assert await UserRepository(mock_db).get_user_by_id("nope") is None
    mock_db.collections["users"].find_one.assert_not_called()


@pytest.mark.asyncio
async def test_get_users_by_ids_skips_invalid(mock_db, make_cursor):
    users = mock_db.collections["users"]
    oid = ObjectId()
    now = datetime.now(timezone.utc)
    users.find.return_value = make_cursor([
        {"_id": oid, "name": "Frank", "created_at": now, "updated_at": now}
    ])

    result = await UserRepository(mock_db).get_users_by_ids([str(oid), "bad"])

    assert [u.name for u in result] == ["Frank"]
    assert users.find.call_args[0][0] == {"_id": {"$in": [oid]}}
