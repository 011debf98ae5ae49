"""HTTP API module."""

from fastapi import APIRouter

from coupon_redeem.api.endpoints import coupons

api_router = APIRouter()

api_router.include_router(coupons.router)
