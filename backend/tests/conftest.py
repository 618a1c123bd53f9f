import os
import uuid
from datetime import date

# Use in-memory sqlite for tests; must be set before app modules build the engine
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import pytest  # noqa: E402

from app.core.time_utils import FixedClock  # noqa: E402
from app.db import Base, SessionLocal, engine  # noqa: E402
from app.models.goal import Goal  # noqa: E402,F401
from app.models.habit import Habit  # noqa: E402,F401
from app.models.habit_log import HabitLog  # noqa: E402,F401
from app.stores.goal_store import GoalIntervalStore  # noqa: E402
from app.stores.habit_store import HabitLogStore, HabitStore  # noqa: E402
from app.stores.locks import OwnerLocks  # noqa: E402

TODAY = date(2024, 6, 27)


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def owner():
    return uuid.uuid4()


@pytest.fixture
def other_owner():
    return uuid.uuid4()


@pytest.fixture
def goal_store(db, clock):
    return GoalIntervalStore(db, clock, OwnerLocks())


@pytest.fixture
def habit_store(db):
    return HabitStore(db)


@pytest.fixture
def log_store(db, clock):
    return HabitLogStore(db, clock)
