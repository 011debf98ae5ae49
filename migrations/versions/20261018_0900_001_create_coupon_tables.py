"""Create coupon redemption tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 09:00:00.000000

Creates the following tables:
- players: Player identities
- rewards: Reward campaigns with validity window and redemption caps
- coupons: Coupon pool per reward
- player_coupons: One row per redemption (coupon assigned at most once)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # ========================================
    # 1. players table
    # ========================================
    op.create_table(
        "players",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================
    # 2. rewards table
    # ========================================
    op.create_table(
        "rewards",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("per_day_limit", sa.Integer(), nullable=False),
        sa.Column("total_limit", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("per_day_limit >= 0", name="ck_reward_per_day_limit"),
        sa.CheckConstraint("total_limit >= 0", name="ck_reward_total_limit"),
        sa.CheckConstraint("start_date <= end_date", name="ck_reward_window"),
    )

    # ========================================
    # 3. coupons table
    # ========================================
    op.create_table(
        "coupons",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("reward_id", sa.BigInteger(), nullable=False),
        sa.Column("value", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["reward_id"], ["rewards.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_coupons_reward_id", "coupons", ["reward_id"])

    # ========================================
    # 4. player_coupons table
    # ========================================
    op.create_table(
        "player_coupons",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("player_id", sa.BigInteger(), nullable=False),
        sa.Column("coupon_id", sa.BigInteger(), nullable=False),
        sa.Column("redeemed_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"]),
        sa.ForeignKeyConstraint(["coupon_id"], ["coupons.id"]),
        sa.UniqueConstraint("coupon_id", name="uq_player_coupon_coupon"),
    )
    op.create_index(
        "idx_player_coupon_player_redeemed", "player_coupons", ["player_id", "redeemed_at"]
    )


def downgrade() -> None:
    op.drop_index("idx_player_coupon_player_redeemed", table_name="player_coupons")
    op.drop_table("player_coupons")
    op.drop_index("ix_coupons_reward_id", table_name="coupons")
    op.drop_table("coupons")
    op.drop_table("rewards")
    op.drop_table("players")
