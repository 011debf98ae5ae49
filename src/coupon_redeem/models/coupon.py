"""Coupon model."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupon_redeem.models.base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from coupon_redeem.models.player_coupon import PlayerCoupon
    from coupon_redeem.models.reward import Reward


class Coupon(Base, TimestampMixin):
    """Coupons table. A coupon is available until a PlayerCoupon references it."""

    __tablename__ = "coupons"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    reward_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("rewards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    reward: Mapped["Reward"] = relationship(back_populates="coupons", lazy="raise")
    assignment: Mapped[Optional["PlayerCoupon"]] = relationship(
        back_populates="coupon", lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Coupon(id={self.id}, reward_id={self.reward_id})>"
