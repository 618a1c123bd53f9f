from datetime import date, timedelta
import random
import sys
import uuid

from app.core.time_utils import FixedClock
from app.db import SessionLocal
from app.models.goal import Goal
from app.models.habit import Habit
from app.stores.goal_store import GoalIntervalStore
from app.stores.habit_store import HabitLogStore, HabitStore
from app.stores.locks import OwnerLocks


def clear_user(db, user_id) -> None:
    """Delete the demo user's goals and habits so we can reseed cleanly."""
    db.query(Goal).filter(Goal.user_id == user_id).delete()
    for habit in db.query(Habit).filter(Habit.user_id == user_id).all():
        db.delete(habit)
    db.commit()


def seed_demo_goals(db, user_id, today: date) -> None:
    """Three goals, each replacing the last: 120g, then 135g, then 150g."""
    store = GoalIntervalStore(db, FixedClock(today), OwnerLocks())
    for weeks_ago, target in [(12, 120), (8, 135), (3, 150)]:
        store.create_goal(user_id, target, today - timedelta(weeks=weeks_ago))


def seed_demo_habits(db, user_id, today: date) -> None:
    """Two habits with 12 weeks of logs; roughly 80% of days completed."""
    habits = HabitStore(db)
    logs = HabitLogStore(db, FixedClock(today))

    protein = habits.create_habit(user_id, "Hit protein target", 7)
    shake = habits.create_habit(user_id, "Post-workout shake", 3)

    start_day = today - timedelta(weeks=12)
    written = 0
    d = start_day
    while d <= today:
        logs.upsert_log(protein.id, user_id, d, random.random() < 0.8)
        written += 1
        # Shake only on Mon/Wed/Fri
        if d.weekday() in (0, 2, 4):
            logs.upsert_log(shake.id, user_id, d, random.random() < 0.9)
            written += 1
        d += timedelta(days=1)

    print(f"Seeded {written} demo habit logs")


def main():
    user_id = uuid.UUID(sys.argv[1]) if len(sys.argv) > 1 else uuid.uuid4()
    today = date.today()
    db = SessionLocal()
    try:
        clear_user(db, user_id)
        seed_demo_goals(db, user_id, today)
        seed_demo_habits(db, user_id, today)
        print(f"Demo data ready for user {user_id}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
