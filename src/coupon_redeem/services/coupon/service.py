"""Coupon redemption service.

Redeems one coupon of a reward campaign for a player:
- Reward validation (exists, window has started, not expired)
- Per-player daily and lifetime limit checks
- Selection of a coupon nobody has redeemed
- Recording the assignment

The read/decide/write sequence runs under a per-(player, reward) lock and
inside one transaction that holds the reward row lock. The unique
constraint on ``player_coupons.coupon_id`` catches the remaining race
(two players picking the same coupon); the losing attempt is rolled back
and retried. Other integrity errors (an unknown player) are rolled back
and re-raised.
"""

import asyncio
import logging
import weakref
from datetime import datetime, tzinfo
from typing import Protocol

from sqlalchemy.exc import IntegrityError

from coupon_redeem.core.clock import Clock, SystemClock, day_window, ensure_aware
from coupon_redeem.core.exceptions import (
    CouponAlreadyAssigned,
    DailyLimitExceeded,
    InvalidReward,
    NoCouponAvailable,
    RedemptionError,
    RewardExpired,
    RewardNotStarted,
    TotalLimitExceeded,
)
from coupon_redeem.models.coupon import Coupon
from coupon_redeem.models.player_coupon import PlayerCoupon
from coupon_redeem.models.reward import Reward

logger = logging.getLogger(__name__)


class RewardStore(Protocol):
    async def get_for_redemption(self, reward_id: int) -> Reward | None: ...


class PlayerCouponStore(Protocol):
    async def count_for_reward_between(
        self, player_id: int, reward_id: int, start: datetime, end: datetime
    ) -> int: ...

    async def count_for_reward(self, player_id: int, reward_id: int) -> int: ...

    async def assign(
        self, player_id: int, coupon_id: int, redeemed_at: datetime
    ) -> PlayerCoupon: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class CouponStore(Protocol):
    async def find_unassigned_for_reward(self, reward_id: int) -> Coupon | None: ...


class RedemptionLocks:
    """Registry of per-(player, reward) locks.

    Locks are held weakly and disappear once no redemption is using them.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[tuple[int, int], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def for_key(self, player_id: int, reward_id: int) -> asyncio.Lock:
        key = (player_id, reward_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)


class CouponRedemptionService:
    """Service that assigns an unused coupon of a reward to a player.

    All collaborators are passed in explicitly; the three stores must
    share one transaction (see ``BaseRepository``).
    """

    def __init__(
        self,
        rewards: RewardStore,
        player_coupons: PlayerCouponStore,
        coupons: CouponStore,
        *,
        clock: Clock | None = None,
        timezone: tzinfo,
        locks: RedemptionLocks | None = None,
        max_attempts: int = 3,
    ):
        """Initialize redemption service.

        @param rewards - Reward lookup
        @param player_coupons - Assignment counts and writes
        @param coupons - Unassigned coupon lookup
        @param clock - Source of the current instant (default: system UTC)
        @param timezone - Timezone whose calendar day bounds the daily limit
        @param locks - Shared per-(player, reward) lock registry
        @param max_attempts - Attempts before a contended pool counts as empty
        """
        self._rewards = rewards
        self._player_coupons = player_coupons
        self._coupons = coupons
        self._clock = clock or SystemClock()
        self._timezone = timezone
        self._locks = locks or RedemptionLocks()
        self._max_attempts = max_attempts

    async def redeem(self, player_id: int, reward_id: int) -> Coupon:
        """Redeem one coupon of a reward for a player.

        @param player_id - Redeeming player
        @param reward_id - Reward campaign
        @returns The assigned coupon
        @raises RedemptionError subclass describing why redemption was refused
        """
        lock = self._locks.for_key(player_id, reward_id)
        async with lock:
            for attempt in range(1, self._max_attempts + 1):
                try:
                    coupon = await self._redeem_once(player_id, reward_id)
                except CouponAlreadyAssigned:
                    await self._player_coupons.rollback()
                    logger.warning(
                        f"Coupon assignment conflict for player {player_id}, "
                        f"reward {reward_id} (attempt {attempt}/{self._max_attempts})"
                    )
                    continue
                except RedemptionError as exc:
                    await self._player_coupons.rollback()
                    logger.info(
                        f"Redemption refused: {exc.kind.value} "
                        f"player={player_id} reward={reward_id}"
                    )
                    raise
                except IntegrityError:
                    await self._player_coupons.rollback()
                    logger.error(
                        f"Assignment rejected by storage for player {player_id}, "
                        f"reward {reward_id}"
                    )
                    raise

                await self._player_coupons.commit()
                logger.info(
                    f"Player {player_id} redeemed coupon {coupon.id} of reward {reward_id}"
                )
                return coupon

        logger.warning(
            f"Giving up on reward {reward_id} for player {player_id} "
            f"after {self._max_attempts} conflicting attempts"
        )
        raise NoCouponAvailable()

    async def _redeem_once(self, player_id: int, reward_id: int) -> Coupon:
        now = self._clock.now()
        reward = await self._validate_reward(reward_id, now)
        await self._validate_limits(player_id, reward, now)
        coupon = await self._select_coupon(reward.id)
        await self._player_coupons.assign(player_id, coupon.id, now)
        return coupon

    async def _validate_reward(self, reward_id: int, now: datetime) -> Reward:
        reward = await self._rewards.get_for_redemption(reward_id)
        if reward is None:
            raise InvalidReward()
        if ensure_aware(reward.start_date) > now:
            raise RewardNotStarted()
        if now > ensure_aware(reward.end_date):
            raise RewardExpired()
        return reward

    async def _validate_limits(
        self, player_id: int, reward: Reward, now: datetime
    ) -> None:
        # Daily check first: a player at both caps sees the daily message.
        start, end = day_window(now, self._timezone)
        daily = await self._player_coupons.count_for_reward_between(
            player_id, reward.id, start, end
        )
        if daily >= reward.per_day_limit:
            raise DailyLimitExceeded()

        total = await self._player_coupons.count_for_reward(player_id, reward.id)
        if total >= reward.total_limit:
            raise TotalLimitExceeded()

    async def _select_coupon(self, reward_id: int) -> Coupon:
        coupon = await self._coupons.find_unassigned_for_reward(reward_id)
        if coupon is None:
            raise NoCouponAvailable()
        return coupon
