"""Redemption failure taxonomy.

Every failure is a client-facing validation error. The HTTP layer maps
each one to ``400`` with ``message`` as the payload, so the message
strings are part of the public contract and must not change.
"""

from enum import Enum


class RedemptionErrorKind(str, Enum):
    """Reasons a redemption is refused."""

    INVALID_REWARD = "INVALID_REWARD"
    REWARD_NOT_STARTED = "REWARD_NOT_STARTED"
    REWARD_EXPIRED = "REWARD_EXPIRED"
    DAILY_LIMIT_EXCEEDED = "DAILY_LIMIT_EXCEEDED"
    TOTAL_LIMIT_EXCEEDED = "TOTAL_LIMIT_EXCEEDED"
    NO_COUPON_AVAILABLE = "NO_COUPON_AVAILABLE"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES: dict[RedemptionErrorKind, str] = {
    RedemptionErrorKind.INVALID_REWARD: "Invalid reward!",
    RedemptionErrorKind.REWARD_NOT_STARTED: "Reward has not started!",
    RedemptionErrorKind.REWARD_EXPIRED: "Reward has expired!",
    RedemptionErrorKind.DAILY_LIMIT_EXCEEDED: "Daily reward limit exceeded!",
    RedemptionErrorKind.TOTAL_LIMIT_EXCEEDED: "Total reward limit exceeded!",
    RedemptionErrorKind.NO_COUPON_AVAILABLE: "Coupon not found for this reward",
}


class RedemptionError(Exception):
    """Base class for refused redemptions."""

    kind: RedemptionErrorKind

    def __init__(self) -> None:
        super().__init__(self.kind.message)

    @property
    def message(self) -> str:
        return self.kind.message


class InvalidReward(RedemptionError):
    kind = RedemptionErrorKind.INVALID_REWARD


class RewardNotStarted(RedemptionError):
    kind = RedemptionErrorKind.REWARD_NOT_STARTED


class RewardExpired(RedemptionError):
    kind = RedemptionErrorKind.REWARD_EXPIRED


class DailyLimitExceeded(RedemptionError):
    kind = RedemptionErrorKind.DAILY_LIMIT_EXCEEDED


class TotalLimitExceeded(RedemptionError):
    kind = RedemptionErrorKind.TOTAL_LIMIT_EXCEEDED


class NoCouponAvailable(RedemptionError):
    kind = RedemptionErrorKind.NO_COUPON_AVAILABLE


class CouponAlreadyAssigned(Exception):
    """A concurrent transaction assigned the selected coupon first.

    Raised by storage when the coupon uniqueness constraint rejects an
    assignment. The redemption service retries on it; it never reaches
    the HTTP layer.
    """

    def __init__(self, coupon_id: int) -> None:
        super().__init__(f"Coupon {coupon_id} is already assigned")
        self.coupon_id = coupon_id
