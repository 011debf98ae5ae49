"""Coupon redemption API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

REQUIRED_FIELDS = (
    ("playerId", "Player is required"),
    ("rewardId", "Reward is required"),
)


class CouponRedeemRequest(BaseModel):
    """Body of ``POST /coupon-redeem``."""

    player_id: int = Field(..., alias="playerId", description="Redeeming player")
    reward_id: int = Field(..., alias="rewardId", description="Reward campaign")

    @model_validator(mode="before")
    @classmethod
    def require_ids(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for key, message in REQUIRED_FIELDS:
                if data.get(key) in (None, ""):
                    raise PydanticCustomError("required", message)
        return data


class CouponResponse(BaseModel):
    """A redeemed coupon."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., description="Coupon ID")
    value: str = Field(..., description="Coupon value")
    reward_id: int = Field(..., alias="rewardId", description="Owning reward ID")


class ErrorResponse(BaseModel):
    """Body of every 400 response."""

    message: str = Field(..., description="Failure message")
    errors: list[str] | None = Field(None, description="All validation messages")
