"""Coupon redemption API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from coupon_redeem.services.coupon import (
    CouponRedeemRequest,
    CouponRedemptionService,
    CouponResponse,
    ErrorResponse,
    get_coupon_service,
)

router = APIRouter(tags=["Coupons"])


@router.post(
    "/coupon-redeem",
    response_model=CouponResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def coupon_redeem(
    request: CouponRedeemRequest,
    service: Annotated[CouponRedemptionService, Depends(get_coupon_service)],
) -> CouponResponse:
    """Redeem one coupon of a reward for a player."""
    coupon = await service.redeem(request.player_id, request.reward_id)
    return CouponResponse.model_validate(coupon)
