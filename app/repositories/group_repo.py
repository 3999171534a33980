from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.base import parse_object_id
from app.models.group import Group, GroupMember, GroupRole


class GroupRepository:
    """Group database operations. Members are embedded in the group document."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["groups"]

    async def create_group(self, name: str, description: str, creator_id: str) -> Group:
        """Create a group with its creator as admin."""
        group = Group(
            name=name,
            description=description,
            created_by=creator_id,
            members=[GroupMember(user_id=creator_id, role=GroupRole.ADMIN)]
        )
        result = await self.collection.insert_one(group.to_document())
        group.id = result.inserted_id
        return group

    async def list_groups_for_user(self, user_id: str) -> List[Group]:
        """Groups the user belongs to, newest first."""
        cursor = self.collection.find({
            "members.user_id": user_id,
            "is_deleted": False
        }).sort("created_at", -1)
        docs = await cursor.to_list(None)
        return [Group(**doc) for doc in docs]

    async def get_group(self, group_id: str, user_id: str) -> Group | None:
        """Get a group by id, only if ``user_id`` is a member."""
        oid = parse_object_id(group_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({
            "_id": oid,
            "members.user_id": user_id,
            "is_deleted": False
        })
        if doc:
            return Group(**doc)
        return None

    async def add_member(
        self, group_id: str, user_id: str, role: GroupRole = GroupRole.MEMBER
    ) -> Group | None:
        """
        Add a member to a group.

        Returns the updated group, or None when the group does not exist or
        the user is already a member.
        """
        oid = parse_object_id(group_id)
        if oid is None:
            return None
        member = GroupMember(user_id=user_id, role=role)
        result = await self.collection.find_one_and_update(
            {
                "_id": oid,
                "is_deleted": False,
                "members.user_id": {"$ne": user_id}
            },
            {
                "$push": {"members": member.model_dump()},
                "$set": {"updated_at": datetime.now(timezone.utc)}
            },
            return_document=True
        )
        if result:
            return Group(**result)
        return None
