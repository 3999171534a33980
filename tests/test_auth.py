"""
Test authentication endpoints
"""
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from bson import ObjectId
from fastapi import HTTPException, status
from httpx import AsyncClient, ASGITransport
from pymongo.errors import DuplicateKeyError

from app.main import app
from app.core.auth import create_access_token, decode_access_token
from app.core.security import hash_password, verify_password
from app.db.mongo import get_db


@pytest_asyncio.fixture
async def anon_client(mock_db):
    """Client with the real auth dependency; only the database is mocked."""
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _user_doc(email="test@example.com", password="testpassword123", placeholder=False):
    now = datetime.now(timezone.utc)
    doc = {
        "_id": ObjectId(),
        "name": "Test User",
        "email": email,
        "is_deleted": False,
        "created_at": now,
        "updated_at": now
    }
    if not placeholder:
        doc["password_hash"] = hash_password(password)
    return doc


def test_password_hashing():
    hashed = hash_password("s3cret-pass")

    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret-pass", None)


def test_token_round_trip():
    user_id = str(ObjectId())

    assert decode_access_token(create_access_token(user_id)) == user_id


def test_expired_token_is_rejected():
    token = create_access_token(str(ObjectId()), expires_delta=timedelta(minutes=-5))

    with pytest.raises(HTTPException) as exc_info:
        decode_access_token(token)
    assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_signup(anon_client, mock_db):
    response = await anon_client.post(
        "/api/v1/auth/signup",
        json={"name": "Test User", "email": "test@example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "test@example.com"
    assert decode_access_token(data["access_token"]) == data["user"]["id"]


@pytest.mark.asyncio
async def test_signup_duplicate_email(anon_client, mock_db):
    mock_db.collections["users"].find_one.return_value = _user_doc()

    response = await anon_client.post(
        "/api/v1/auth/signup",
        json={"name": "Test User", "email": "test@example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    mock_db.collections["users"].insert_one.assert_not_called()


@pytest.mark.asyncio
async def test_signup_claims_invited_profile(anon_client, mock_db):
    users = mock_db.collections["users"]
    placeholder = _user_doc(placeholder=True)
    users.find_one.return_value = placeholder
    claimed = dict(placeholder, password_hash="hashed", name="Real Name")
    users.find_one_and_update.return_value = claimed

    response = await anon_client.post(
        "/api/v1/auth/signup",
        json={"name": "Real Name", "email": "test@example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["id"] == str(placeholder["_id"])
    users.insert_one.assert_not_called()
    update = users.find_one_and_update.call_args[0][1]["$set"]
    assert update["name"] == "Real Name"
    assert verify_password("testpassword123", update["password_hash"])


@pytest.mark.asyncio
async def test_login(anon_client, mock_db):
    mock_db.collections["users"].find_one.return_value = _user_doc()

    response = await anon_client.post(
        "/api/v1/auth/login",
        json={"email": "test@example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert "access_token" in response.json()


@pytest.mark.asyncio
async def test_login_wrong_password(anon_client, mock_db):
    mock_db.collections["users"].find_one.return_value = _user_doc()

    response = await anon_client.post(
        "/api/v1/auth/login",
        json={"email": "test@example.com", "password": "nope-nope"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_login_placeholder_profile_cannot_log_in(anon_client, mock_db):
    mock_db.collections["users"].find_one.return_value = _user_doc(placeholder=True)

    response = await anon_client.post(
        "/api/v1/auth/login",
        json={"email": "test@example.com", "password": "anything1"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_me_with_token(anon_client, mock_db):
    doc = _user_doc()
    mock_db.collections["users"].find_one.return_value = doc
    token = create_access_token(str(doc["_id"]))

    response = await anon_client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == str(doc["_id"])


@pytest.mark.asyncio
async def test_me_with_invalid_token(anon_client):
    response = await anon_client.get(
        "/api/v1/auth/me",
        headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_update_profile_name(anon_client, mock_db):
    doc = _user_doc()
    users = mock_db.collections["users"]
    users.find_one.return_value = doc
    users.find_one_and_update.return_value = dict(doc, name="New Name")
    token = create_access_token(str(doc["_id"]))

    response = await anon_client.patch(
        "/api/v1/users/me",
        headers={"Authorization": f"Bearer {token}"},
        json={"name": "New Name"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "New Name"


@pytest.mark.asyncio
async def test_signup_race_on_same_email(anon_client, mock_db):
    mock_db.collections["users"].insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")

    response = await anon_client.post(
        "/api/v1/auth/signup",
        json={"name": "Test User", "email": "test@example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_signup_stores_lowercased_email(anon_client, mock_db):
    users = mock_db.collections["users"]

    response = await anon_client.post(
        "/api/v1/auth/signup",
        json={"name": "Alice", "email": "Alice@Example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["email"] == "alice@example.com"
    assert users.find_one.call_args[0][0]["email"] == "alice@example.com"
    assert users.insert_one.call_args[0][0]["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_signup_claims_invited_profile_regardless_of_case(anon_client, mock_db):
    users = mock_db.collections["users"]
    placeholder = _user_doc(email="alice@example.com", placeholder=True)
    users.find_one.side_effect = (
        lambda query: placeholder if query.get("email") == "alice@example.com" else None
    )
    users.find_one_and_update.return_value = dict(placeholder, password_hash="hashed")

    response = await anon_client.post(
        "/api/v1/auth/signup",
        json={"name": "Alice", "email": "ALICE@example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["id"] == str(placeholder["_id"])
    users.insert_one.assert_not_called()


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(anon_client, mock_db):
    doc = _user_doc(email="alice@example.com")
    mock_db.collections["users"].find_one.side_effect = (
        lambda query: doc if query.get("email") == "alice@example.com" else None
    )

    response = await anon_client.post(
        "/api/v1/auth/login",
        json={"email": "Alice@Example.com", "password": "testpassword123"}
    )

    assert response.status_code == status.HTTP_200_OK
