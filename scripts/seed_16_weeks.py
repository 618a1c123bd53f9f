#!/usr/bin/env python3
"""
Seed 16 weeks of protein goals and habit logs into the tracker API.

Pattern:
  - A new protein goal every 4 weeks, stepping the target up as the user
    builds the habit. Each new goal closes the previous one server-side.
  - One "Hit protein target" habit (7 days/week) logged daily, with a missed
    day every so often so streaks break and rebuild.
  - One "Glasses of water" habit logged with a daily count.

Goal targets per 4-week block (grams/day): [110, 125, 140, 150]

Usage examples:
  - Against a local dev server:
      python scripts/seed_16_weeks.py --base-url http://localhost:8000 --user-id <UUID>
  - Against Ingress (external IP/host):
      python scripts/seed_16_weeks.py --base-url http://<EXTERNAL-IP>/api --user-id <UUID>
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys
import uuid

try:
    import requests  # type: ignore
except Exception as exc:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


BLOCK_TARGETS = [110, 125, 140, 150]
WEEKS = 16

# Days (offset from the first seeded day) on which the protein habit is missed
MISSED_EVERY = 9


def monday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=d.weekday())


def request_json(base_url: str, user_id: str, method: str, path: str, payload: dict | None = None) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.request(method, url, json=payload, headers={"X-User-Id": user_id}, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json() if r.content else {}


def seed_goals(base_url: str, user_id: str, first_monday: dt.date) -> None:
    for block, target in enumerate(BLOCK_TARGETS):
        start = first_monday + dt.timedelta(weeks=4 * block)
        request_json(
            base_url,
            user_id,
            "POST",
            "goals",
            {"target_protein": float(target), "start_date": start.isoformat()},
        )


def seed_habits(base_url: str, user_id: str, first_monday: dt.date, today: dt.date) -> None:
    protein = request_json(
        base_url, user_id, "POST", "habits",
        {"title": "Hit protein target", "target_frequency": 7},
    )
    water = request_json(
        base_url, user_id, "POST", "habits",
        {"title": "Glasses of water", "target_frequency": 7},
    )

    day = first_monday
    offset = 0
    while day <= today:
        hit = offset % MISSED_EVERY != MISSED_EVERY - 1
        request_json(
            base_url, user_id, "POST", f"habits/{protein['id']}/logs",
            {"log_date": day.isoformat(), "completed": hit},
        )
        glasses = 4 + (offset % 5)
        request_json(
            base_url, user_id, "POST", f"habits/{water['id']}/logs",
            {"log_date": day.isoformat(), "completed": glasses >= 6, "count": glasses},
        )
        day += dt.timedelta(days=1)
        offset += 1


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed 16 weeks of protein goals and habit logs")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://<IP>/api or http://localhost:8000)")
    ap.add_argument("--user-id", default=None, help="Owner UUID sent as X-User-Id (random if omitted)")
    args = ap.parse_args()

    base_url = args.base_url
    user_id = args.user_id or str(uuid.uuid4())

    today = dt.date.today()
    first_monday = monday_of_week(today) - dt.timedelta(weeks=WEEKS - 1)

    seed_goals(base_url, user_id, first_monday)
    seed_habits(base_url, user_id, first_monday, today)

    print(f"Seed complete: {WEEKS} weeks created for user {user_id}.")


if __name__ == "__main__":
    main()
