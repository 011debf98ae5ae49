"""Tests for repository queries against SQLite."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from coupon_redeem.core.exceptions import CouponAlreadyAssigned
from coupon_redeem.models import Base, Coupon, Player, Reward
from coupon_redeem.repositories import (
    CouponRepository,
    PlayerCouponRepository,
    PlayerRepository,
    RewardRepository,
)

DAY_START = datetime(2026, 10, 18, tzinfo=timezone.utc)
DAY_END = DAY_START + timedelta(days=1)


@pytest_asyncio.fixture
async def session(tmp_path):
    """Async session on a fresh SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}", poolclass=NullPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def data(session):
    """Two players, two rewards, three coupons for the first reward and one for the second."""
    players = PlayerRepository(session)
    rewards = RewardRepository(session)
    coupons = CouponRepository(session)

    alice = await players.create({"name": "Alice"})
    bob = await players.create({"name": "Bob"})
    window = {
        "start_date": DAY_START - timedelta(days=10),
        "end_date": DAY_END + timedelta(days=10),
        "per_day_limit": 3,
        "total_limit": 10,
    }
    flights = await rewards.create(Reward(name="Flights", **window))
    hotels = await rewards.create(Reward(name="Hotels", **window))
    flight_coupons = [
        await coupons.create({"reward_id": flights.id, "value": str(i)}) for i in range(3)
    ]
    hotel_coupon = await coupons.create({"reward_id": hotels.id, "value": "h"})
    await session.commit()
    return {
        "alice": alice,
        "bob": bob,
        "flights": flights,
        "hotels": hotels,
        "flight_coupons": flight_coupons,
        "hotel_coupon": hotel_coupon,
    }


class TestRewardRepository:
    """Reward lookup."""

    @pytest.mark.asyncio
    async def test_get_for_redemption(self, session, data):
        repo = RewardRepository(session)

        reward = await repo.get_for_redemption(data["flights"].id)

        assert reward is not None
        assert reward.name == "Flights"
        assert await repo.get_for_redemption(9999) is None


class TestPlayerCouponRepository:
    """Redemption counts and assignment writes."""

    @pytest.mark.asyncio
    async def test_count_for_reward_only_counts_matching_rows(self, session, data):
        repo = PlayerCouponRepository(session)
        alice, bob = data["alice"], data["bob"]
        c1, c2, c3 = data["flight_coupons"]

        await repo.assign(alice.id, c1.id, DAY_START + timedelta(hours=1))
        await repo.assign(alice.id, c2.id, DAY_START - timedelta(days=3))
        await repo.assign(bob.id, c3.id, DAY_START + timedelta(hours=2))
        await repo.assign(alice.id, data["hotel_coupon"].id, DAY_START + timedelta(hours=3))
        await repo.commit()

        assert await repo.count_for_reward(alice.id, data["flights"].id) == 2
        assert await repo.count_for_reward(bob.id, data["flights"].id) == 1
        assert await repo.count_for_reward(alice.id, data["hotels"].id) == 1
        assert await repo.count_for_reward(bob.id, data["hotels"].id) == 0

    @pytest.mark.asyncio
    async def test_count_between_is_half_open(self, session, data):
        repo = PlayerCouponRepository(session)
        alice = data["alice"]
        c1, c2, c3 = data["flight_coupons"]

        await repo.assign(alice.id, c1.id, DAY_START)
        await repo.assign(alice.id, c2.id, DAY_END - timedelta(microseconds=1))
        await repo.assign(alice.id, c3.id, DAY_END)
        await repo.commit()

        daily = await repo.count_for_reward_between(
            alice.id, data["flights"].id, DAY_START, DAY_END
        )

        assert daily == 2

    @pytest.mark.asyncio
    async def test_assign_same_coupon_twice_fails(self, session, data):
        repo = PlayerCouponRepository(session)
        # Rollback expires loaded instances, so keep plain ids.
        coupon_id = data["flight_coupons"][0].id
        alice_id, bob_id = data["alice"].id, data["bob"].id
        reward_id = data["flights"].id

        await repo.assign(alice_id, coupon_id, DAY_START)
        await repo.commit()

        with pytest.raises(CouponAlreadyAssigned) as exc_info:
            await repo.assign(bob_id, coupon_id, DAY_START)
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        await repo.rollback()

        assert await repo.count_for_reward(bob_id, reward_id) == 0
        assert await repo.count_for_reward(alice_id, reward_id) == 1


class TestCouponRepository:
    """Unassigned coupon lookup."""

    @pytest.mark.asyncio
    async def test_find_unassigned_skips_assigned(self, session, data):
        coupons = CouponRepository(session)
        assignments = PlayerCouponRepository(session)
        c1, c2, c3 = data["flight_coupons"]

        await assignments.assign(data["alice"].id, c1.id, DAY_START)
        await assignments.assign(data["bob"].id, c3.id, DAY_START)
        await assignments.commit()

        coupon = await coupons.find_unassigned_for_reward(data["flights"].id)

        assert coupon is not None
        assert coupon.id == c2.id

    @pytest.mark.asyncio
    async def test_find_unassigned_stays_within_reward(self, session, data):
        coupons = CouponRepository(session)
        assignments = PlayerCouponRepository(session)

        for coupon in data["flight_coupons"]:
            await assignments.assign(data["alice"].id, coupon.id, DAY_START)
        await assignments.commit()

        assert await coupons.find_unassigned_for_reward(data["flights"].id) is None
        hotel = await coupons.find_unassigned_for_reward(data["hotels"].id)
        assert isinstance(hotel, Coupon)
        assert hotel.id == data["hotel_coupon"].id

    @pytest.mark.asyncio
    async def test_get_by_id(self, session, data):
        player = await PlayerRepository(session).get_by_id(data["alice"].id)

        assert isinstance(player, Player)
        assert player.name == "Alice"
