"""FastAPI dependencies for the redemption service."""

from typing import Annotated
from zoneinfo import ZoneInfo

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from coupon_redeem.core.config import Settings, get_settings
from coupon_redeem.infrastructure.database import get_async_db
from coupon_redeem.repositories import (
    CouponRepository,
    PlayerCouponRepository,
    RewardRepository,
)
from coupon_redeem.services.coupon.service import (
    CouponRedemptionService,
    RedemptionLocks,
)


def get_redemption_locks(request: Request) -> RedemptionLocks:
    """Get the application-wide lock registry."""
    return request.app.state.redemption_locks


def get_coupon_service(
    session: Annotated[AsyncSession, Depends(get_async_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    locks: Annotated[RedemptionLocks, Depends(get_redemption_locks)],
) -> CouponRedemptionService:
    """Build a redemption service bound to the request session."""
    return CouponRedemptionService(
        RewardRepository(session),
        PlayerCouponRepository(session),
        CouponRepository(session),
        timezone=ZoneInfo(settings.redemption_timezone),
        locks=locks,
        max_attempts=settings.redeem_max_attempts,
    )
