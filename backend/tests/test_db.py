from datetime import date

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.time_utils import FixedClock
from app.db import Base, make_engine
from app.models.goal import Goal
from app.stores.goal_store import GoalIntervalStore
from app.stores.locks import OwnerLocks


def test_only_in_memory_sqlite_shares_one_connection(tmp_path):
    assert isinstance(make_engine("sqlite://").pool, StaticPool)
    assert isinstance(make_engine("sqlite+pysqlite:///:memory:").pool, StaticPool)
    assert not isinstance(make_engine(f"sqlite:///{tmp_path / 'a.db'}").pool, StaticPool)


def test_file_sqlite_sessions_do_not_see_uncommitted_close(tmp_path, owner):
    engine = make_engine(f"sqlite:///{tmp_path / 'tracker.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False)
    clock = FixedClock(date(2024, 6, 27))

    setup = Session()
    GoalIntervalStore(setup, clock, OwnerLocks()).create_goal(owner, 100, date(2024, 1, 1))
    setup.close()

    writer, reader = Session(), Session()
    try:
        GoalIntervalStore(writer, clock, OwnerLocks())._close_reaching(owner, date(2024, 2, 1))

        (seen,) = reader.query(Goal).filter(Goal.user_id == owner).all()
        assert seen.end_date is None

        writer.rollback()
    finally:
        writer.close()
        reader.close()
        engine.dispose()
