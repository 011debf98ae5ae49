"""Reward campaign model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupon_redeem.models.base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from coupon_redeem.models.coupon import Coupon


class Reward(Base, TimestampMixin):
    """Rewards table.

    A time-bounded campaign with per-player redemption caps. Rewards and
    their coupon pools are seeded out of band.
    """

    __tablename__ = "rewards"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Validity window
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Per-player caps
    per_day_limit: Mapped[int] = mapped_column(Integer, nullable=False)
    total_limit: Mapped[int] = mapped_column(Integer, nullable=False)

    coupons: Mapped[list["Coupon"]] = relationship(
        back_populates="reward", lazy="raise"
    )

    __table_args__ = (
        CheckConstraint("per_day_limit >= 0", name="ck_reward_per_day_limit"),
        CheckConstraint("total_limit >= 0", name="ck_reward_total_limit"),
        CheckConstraint("start_date <= end_date", name="ck_reward_window"),
    )

    def __repr__(self) -> str:
        return (
            f"<Reward(id={self.id}, name={self.name!r}, "
            f"per_day_limit={self.per_day_limit}, total_limit={self.total_limit})>"
        )
