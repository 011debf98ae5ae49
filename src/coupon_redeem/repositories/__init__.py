"""Repository layer for database operations.

Async repository implementations using SQLAlchemy 2.x. Each repository
exposes the intent-named queries the redemption workflow needs.
"""

from coupon_redeem.repositories.base import BaseRepository
from coupon_redeem.repositories.coupon import CouponRepository
from coupon_redeem.repositories.player import PlayerRepository
from coupon_redeem.repositories.player_coupon import PlayerCouponRepository
from coupon_redeem.repositories.reward import RewardRepository

__all__ = [
    "BaseRepository",
    "CouponRepository",
    "PlayerRepository",
    "PlayerCouponRepository",
    "RewardRepository",
]
