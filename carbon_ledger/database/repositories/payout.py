"""
Repository for payout database operations.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.schemas import PayoutDBModel


class PayoutRepository(BaseRepository[PayoutDBModel]):
    """Payout records; insert and read only."""

    def __init__(self, session: AsyncSession):
        super().__init__(PayoutDBModel, session)

    async def list_by_owner(self, owner_id: str) -> List[PayoutDBModel]:
        """Get every payout of an owner, oldest first."""
        stmt = (
            select(self.model)
            .where(self.model.owner_id == owner_id)
            .order_by(self.model.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
