from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.expense import Expense


class ExpenseRepository:
    """Expense database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["expenses"]

    async def create_expense(self, expense: Expense) -> Expense:
        """Insert an expense together with its materialised splits."""
        result = await self.collection.insert_one(expense.to_document())
        expense.id = result.inserted_id
        return expense

    async def list_by_group(self, group_id: str) -> List[Expense]:
        """All expenses of a group, newest first."""
        cursor = self.collection.find({"group_id": group_id}).sort("date", -1)
        docs = await cursor.to_list(None)
        return [Expense(**doc) for doc in docs]

    async def list_recent(self, group_ids: List[str], limit: int) -> List[Expense]:
        """Most recent expenses across several groups."""
        if not group_ids:
            return []
        cursor = self.collection.find(
            {"group_id": {"$in": group_ids}}
        ).sort("date", -1).limit(limit)
        docs = await cursor.to_list(None)
        return [Expense(**doc) for doc in docs]
