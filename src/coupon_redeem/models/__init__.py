"""Database models for the coupon redemption service."""

from coupon_redeem.models.base import Base, TimestampMixin
from coupon_redeem.models.coupon import Coupon
from coupon_redeem.models.player import Player
from coupon_redeem.models.player_coupon import PlayerCoupon
from coupon_redeem.models.reward import Reward

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Business models
    "Player",
    "Reward",
    "Coupon",
    "PlayerCoupon",
]
