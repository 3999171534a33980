from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.settlement import Settlement


class SettlementRepository:
    """Settlement database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["settlements"]

    async def create_settlement(self, settlement: Settlement) -> Settlement:
        result = await self.collection.insert_one(settlement.to_document())
        settlement.id = result.inserted_id
        return settlement

    async def list_by_group(self, group_id: str) -> List[Settlement]:
        """All settlements of a group, newest first."""
        cursor = self.collection.find({"group_id": group_id}).sort("date", -1)
        docs = await cursor.to_list(None)
        return [Settlement(**doc) for doc in docs]

    async def list_recent(self, group_ids: List[str], limit: int) -> List[Settlement]:
        if not group_ids:
            return []
        cursor = self.collection.find(
            {"group_id": {"$in": group_ids}}
        ).sort("date", -1).limit(limit)
        docs = await cursor.to_list(None)
        return [Settlement(**doc) for doc in docs]
