"""Coupon redemption service module."""

from coupon_redeem.services.coupon.dependencies import get_coupon_service
from coupon_redeem.services.coupon.schemas import (
    CouponRedeemRequest,
    CouponResponse,
    ErrorResponse,
)
from coupon_redeem.services.coupon.service import (
    CouponRedemptionService,
    RedemptionLocks,
)

__all__ = [
    # Schemas
    "CouponRedeemRequest",
    "CouponResponse",
    "ErrorResponse",
    # Service
    "CouponRedemptionService",
    "RedemptionLocks",
    "get_coupon_service",
]
