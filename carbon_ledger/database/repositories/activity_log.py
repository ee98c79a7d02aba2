"""
Repository for activity log database operations.
"""
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import ActivityLogDBModel


class ActivityLogRepository(BaseRepository[ActivityLogDBModel]):
    """Owner-scoped access to activity logs."""

    def __init__(self, session: AsyncSession):
        super().__init__(ActivityLogDBModel, session)

    async def list_by_owner(self, owner_id: str) -> List[ActivityLogDBModel]:
        """
        Get every log of an owner, oldest first.

        Args:
            owner_id: Owner identity

        Returns:
            List of activity logs
        """
        stmt = (
            select(self.model)
            .where(self.model.owner_id == owner_id)
            .order_by(self.model.date, self.model.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_owned(self, id: UUID, owner_id: str) -> bool:
        """
        Delete a log only if it belongs to the owner.

        Returns:
            True if deleted, False if no such log exists for that owner
        """
        stmt = delete(self.model).where(
            self.model.id == id, self.model.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
