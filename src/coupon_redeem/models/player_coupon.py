"""Player coupon assignment model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupon_redeem.models.base import Base, BigIntPK

if TYPE_CHECKING:
    from coupon_redeem.models.coupon import Coupon
    from coupon_redeem.models.player import Player

COUPON_UNIQUE_CONSTRAINT = "uq_player_coupon_coupon"


class PlayerCoupon(Base):
    """Player coupons table.

    One row per redemption. Rows are written once by the redemption
    workflow and never updated.
    """

    __tablename__ = "player_coupons"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("players.id"), nullable=False
    )
    coupon_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("coupons.id"), nullable=False
    )
    redeemed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    player: Mapped["Player"] = relationship(back_populates="coupons", lazy="raise")
    coupon: Mapped["Coupon"] = relationship(back_populates="assignment", lazy="raise")

    __table_args__ = (
        # A coupon is assigned to at most one player, ever.
        UniqueConstraint("coupon_id", name=COUPON_UNIQUE_CONSTRAINT),
        Index("idx_player_coupon_player_redeemed", "player_id", "redeemed_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<PlayerCoupon(player_id={self.player_id}, coupon_id={self.coupon_id}, "
            f"redeemed_at={self.redeemed_at})>"
        )
