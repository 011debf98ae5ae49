"""Player model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupon_redeem.models.base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from coupon_redeem.models.player_coupon import PlayerCoupon


class Player(Base, TimestampMixin):
    """Players table."""

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    coupons: Mapped[list["PlayerCoupon"]] = relationship(
        back_populates="player", lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name={self.name!r})>"
