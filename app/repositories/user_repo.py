from typing import List
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime, timezone
from app.models.base import parse_object_id
from app.models.user import UserCreate, UserInDB
from app.core.security import hash_password

class UserRepository:
    """User database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def create_user(self, user_data: UserCreate) -> UserInDB:
        """Create a new registered user."""
        now = datetime.now(timezone.utc)
        user_dict = {
            "name": user_data.name,
            "email": user_data.email,
            "password_hash": hash_password(user_data.password),
            "is_deleted": False,
            "created_at": now,
            "updated_at": now
        }

        result = await self.collection.insert_one(user_dict)
        user_dict["_id"] = result.inserted_id
        return UserInDB(**user_dict)

    async def create_placeholder(
        self, name: str, invited_by: str, email: str | None = None
    ) -> UserInDB:
        """Create a profile for someone invited to a group who has not signed up."""
        now = datetime.now(timezone.utc)
        user_dict = {
            "name": name,
            "invited_by": invited_by,
            "is_deleted": False,
            "created_at": now,
            "updated_at": now
        }
        # Left out entirely when absent so the sparse unique index ignores it
        if email:
            user_dict["email"] = email

        result = await self.collection.insert_one(user_dict)
        user_dict["_id"] = result.inserted_id
        return UserInDB(**user_dict)

    async def claim_placeholder(self, user_id: str, user_data: UserCreate) -> UserInDB | None:
        """Give an invited profile a password and name on signup."""
        return await self.update_user(user_id, {
            "name": user_data.name,
            "password_hash": hash_password(user_data.password)
        })

    async def get_user_by_email(self, email: str) -> UserInDB | None:
        """Get user by email."""
        user = await self.collection.find_one({"email": email.lower(), "is_deleted": False})
        if user:
            return UserInDB(**user)
        return None

    async def get_user_by_id(self, user_id: str) -> UserInDB | None:
        """Get user by ID."""
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        user = await self.collection.find_one({"_id": oid, "is_deleted": False})
        if user:
            return UserInDB(**user)
        return None

    async def get_users_by_ids(self, user_ids: List[str]) -> List[UserInDB]:
        """Get several users at once; unknown or invalid ids are skipped."""
        oids = [oid for oid in (parse_object_id(uid) for uid in user_ids) if oid is not None]
        if not oids:
            return []
        docs = await self.collection.find({"_id": {"$in": oids}}).to_list(None)
        return [UserInDB(**doc) for doc in docs]

    async def update_user(self, user_id: str, update_data: dict) -> UserInDB | None:
        """Update user."""
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        update_data["updated_at"] = datetime.now(timezone.utc)
        result = await self.collection.find_one_and_update(
            {"_id": oid, "is_deleted": False},
            {"$set": update_data},
            return_document=True
        )
        if result:
            return UserInDB(**result)
        return None
