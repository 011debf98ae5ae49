"""Repository for player coupon assignments."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Select

from coupon_redeem.core.exceptions import CouponAlreadyAssigned
from coupon_redeem.models.coupon import Coupon
from coupon_redeem.models.player_coupon import COUPON_UNIQUE_CONSTRAINT, PlayerCoupon
from coupon_redeem.repositories.base import BaseRepository


class PlayerCouponRepository(BaseRepository[PlayerCoupon]):
    """Repository for PlayerCoupon database operations.

    Handles:
    - Per-player redemption counts for a reward (daily and lifetime)
    - Recording a new assignment
    """

    model = PlayerCoupon

    def _count_for_reward(self, player_id: int, reward_id: int) -> Select:
        return (
            select(func.count(self.model.id))
            .join(Coupon, Coupon.id == self.model.coupon_id)
            .where(
                self.model.player_id == player_id,
                Coupon.reward_id == reward_id,
            )
        )

    async def count_for_reward_between(
        self,
        player_id: int,
        reward_id: int,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count a player's redemptions of a reward in ``[start, end)``.

        @param player_id - Player ID
        @param reward_id - Reward ID
        @param start - Window start (inclusive)
        @param end - Window end (exclusive)
        @returns Number of redemptions
        """
        stmt = self._count_for_reward(player_id, reward_id).where(
            self.model.redeemed_at >= start,
            self.model.redeemed_at < end,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_for_reward(self, player_id: int, reward_id: int) -> int:
        """Count all of a player's redemptions of a reward.

        @param player_id - Player ID
        @param reward_id - Reward ID
        @returns Number of redemptions
        """
        result = await self.session.execute(self._count_for_reward(player_id, reward_id))
        return result.scalar() or 0

    async def assign(
        self, player_id: int, coupon_id: int, redeemed_at: datetime
    ) -> PlayerCoupon:
        """Record that a player redeemed a coupon.

        Raises ``CouponAlreadyAssigned`` when the coupon was already assigned
        by a concurrent transaction. Any other constraint violation (unknown
        player, unknown coupon) propagates as ``IntegrityError``.

        @param player_id - Player ID
        @param coupon_id - Coupon ID
        @param redeemed_at - Redemption timestamp
        @returns Created assignment
        """
        assignment = self.model(
            player_id=player_id, coupon_id=coupon_id, redeemed_at=redeemed_at
        )
        self.session.add(assignment)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if is_coupon_taken(exc):
                raise CouponAlreadyAssigned(coupon_id) from exc
            raise
        return assignment


def is_coupon_taken(exc: IntegrityError) -> bool:
    """Tell a coupon uniqueness violation apart from other integrity errors.

    asyncpg exposes the violated constraint name; SQLite only names the
    column in its message.
    """
    driver_error = getattr(exc.orig, "__cause__", None)
    if getattr(driver_error, "constraint_name", None) == COUPON_UNIQUE_CONSTRAINT:
        return True
    message = str(exc.orig)
    return (
        COUPON_UNIQUE_CONSTRAINT in message
        or "UNIQUE constraint failed: player_coupons.coupon_id" in message
    )
