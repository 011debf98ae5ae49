"""Repository for reward campaigns."""

from sqlalchemy import select

from coupon_redeem.models.reward import Reward
from coupon_redeem.repositories.base import BaseRepository


class RewardRepository(BaseRepository[Reward]):
    """Repository for Reward database operations."""

    model = Reward

    async def get_for_redemption(self, reward_id: int) -> Reward | None:
        """Fetch a reward and lock its row for the rest of the transaction.

        The row lock serialises concurrent redemptions of one reward across
        processes. Backends without ``FOR UPDATE`` (SQLite) ignore it.

        @param reward_id - Reward primary key
        @returns Reward or None
        """
        stmt = select(self.model).where(self.model.id == reward_id).with_for_update()
        result = await self.session.execute(stmt)
        return result.scalars().first()
