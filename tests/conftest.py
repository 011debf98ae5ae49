"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from coupon_redeem.models import Base, Coupon, Player, Reward


@pytest.fixture
def db_path(tmp_path):
    """SQLite database file shared by the sync seeding session and the app."""
    return tmp_path / "coupons.db"


@pytest.fixture
def db(db_path):
    """Synchronous session used to seed and inspect test data."""
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    session = Session(engine, expire_on_commit=False)
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def app(db_path):
    """Create FastAPI application wired to the test database."""
    from coupon_redeem.infrastructure.database import get_async_db
    from coupon_redeem.main import create_app

    application = create_app()
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_async_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_async_db] = override_get_async_db
    return application


@pytest.fixture
def client(app, db):
    """Create test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def settings():
    """Create settings instance for testing."""
    from coupon_redeem.core.config import Settings

    return Settings(environment="testing")


class Seeder:
    """Writes players, rewards and coupons, committing after each call."""

    def __init__(self, session: Session):
        self.session = session

    def player(self, name: str = "Sujoy Nath") -> Player:
        player = Player(name=name)
        self.session.add(player)
        self.session.commit()
        return player

    def reward(
        self,
        *,
        per_day_limit: int = 3,
        total_limit: int = 21,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        name: str = "Airline ticket",
    ) -> Reward:
        now = datetime.now(timezone.utc)
        reward = Reward(
            name=name,
            start_date=start_date or now - timedelta(days=1),
            end_date=end_date or now + timedelta(days=1),
            per_day_limit=per_day_limit,
            total_limit=total_limit,
        )
        self.session.add(reward)
        self.session.commit()
        return reward

    def coupons(self, reward: Reward, count: int = 1, value: str = "1") -> list[Coupon]:
        coupons = [Coupon(reward_id=reward.id, value=value) for _ in range(count)]
        self.session.add_all(coupons)
        self.session.commit()
        return coupons


@pytest.fixture
def seed(db):
    """Seeder bound to the test database."""
    return Seeder(db)
