"""
Pytest configuration and fixtures for the empathy trainer tests.

Provides:
- A controllable clock
- A fresh SQLite database per test
- Trainers with the seeded catalog or a hand-built one
- FastAPI test client
"""

import os
import random
from datetime import datetime, timedelta

# Set test environment before importing the app
os.environ["EMPATHY_DATABASE_URL"] = "sqlite+aiosqlite:///./test_empathy_api.db"
os.environ["EMPATHY_RANDOM_SEED"] = "11"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from empathy_trainer.db.base import Base
from empathy_trainer.db.session import make_engine, make_session_factory
from empathy_trainer.models.scenario import Scenario
from empathy_trainer.services.trainer import EmpathyTrainer

START = datetime(2026, 3, 2, 9, 30)


class FakeClock:
    def __init__(self, start: datetime = START):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def today(self):
        return self.current.date()

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'empathy.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def trainer(session_factory, clock) -> EmpathyTrainer:
    """Trainer over the full seeded catalog."""
    trainer = EmpathyTrainer(session_factory, clock=clock, rng=random.Random(7))
    await trainer.initialize()
    return trainer


@pytest.fixture
def make_catalog(session_factory, clock):
    """Build a trainer over a hand-made catalog: make_catalog([("a", 0), ("b", 5)])."""

    async def _make(usages, daily_cap=3, seed=7):
        async with session_factory() as db:
            async with db.begin():
                for key, usage in usages:
                    db.add(
                        Scenario(
                            scenario_key=f"scenario_{key}",
                            example_key=f"example_{key}",
                            category="general",
                            difficulty=1,
                            is_active=True,
                            usage_count=usage,
                        )
                    )
        return EmpathyTrainer(session_factory, clock=clock, rng=random.Random(seed), daily_cap=daily_cap)

    return _make


@pytest.fixture(scope="session", autouse=True)
def cleanup_api_database():
    yield
    if os.path.exists("./test_empathy_api.db"):
        os.remove("./test_empathy_api.db")


@pytest.fixture
def client():
    """FastAPI test client on a pinned clock, reset before each test."""
    from empathy_trainer.main import app

    with TestClient(app) as test_client:
        app.state.trainer.clock = FakeClock()
        test_client.post("/api/reset")
        yield test_client
