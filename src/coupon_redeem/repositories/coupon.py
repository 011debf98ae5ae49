"""Repository for coupons."""

from sqlalchemy import exists, select

from coupon_redeem.models.coupon import Coupon
from coupon_redeem.models.player_coupon import PlayerCoupon
from coupon_redeem.repositories.base import BaseRepository


class CouponRepository(BaseRepository[Coupon]):
    """Repository for Coupon database operations."""

    model = Coupon

    async def find_unassigned_for_reward(self, reward_id: int) -> Coupon | None:
        """Find any coupon of a reward that no player has redeemed.

        Which candidate is returned is unspecified. On PostgreSQL rows locked
        by a concurrent redemption are skipped.

        @param reward_id - Reward ID
        @returns Coupon or None if the pool is exhausted
        """
        assigned = exists().where(PlayerCoupon.coupon_id == self.model.id)
        stmt = (
            select(self.model)
            .where(self.model.reward_id == reward_id, ~assigned)
            .limit(1)
            .with_for_update(skip_locked=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
