from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from app.api.deps import (
    get_clock,
    get_current_user_id,
    get_habit_log_store,
    get_habit_store,
)
from app.core.habit_stats import summarize
from app.core.query import RangeQuery
from app.core.time_utils import Clock
from app.schemas.goal import Pagination
from app.schemas.habit import (
    HabitCreate,
    HabitListResponse,
    HabitLogCreate,
    HabitLogListResponse,
    HabitLogRead,
    HabitRead,
    HabitStatsRead,
    HabitUpdate,
    HabitWithStats,
    StreakRead,
)
from app.stores.habit_store import HabitLogStore, HabitStore


router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("", response_model=HabitListResponse)
def list_habits(
    archived: Optional[bool] = Query(None),
    limit: Optional[int] = Query(None),
    offset: int = Query(0),
    user_id: UUID = Depends(get_current_user_id),
    store: HabitStore = Depends(get_habit_store),
):
    limit = store.config.habit_list_default_limit if limit is None else limit
    summaries = store.list_habits(user_id, archived=archived, limit=limit, offset=offset)

    habits: list[HabitWithStats] = []
    for s in summaries:
        base = HabitRead.model_validate(s.habit, from_attributes=True)
        habits.append(
            HabitWithStats(
                **base.model_dump(),
                total_logs=s.total_logs,
                completed_logs=s.completed_logs,
                completion_rate=s.completion_rate,
                last_logged=s.last_logged,
            )
        )
    return HabitListResponse(
        habits=habits,
        total=len(habits),
        pagination=Pagination(
            limit=limit, offset=offset, has_more=len(habits) == limit
        ),
    )


@router.post("", response_model=HabitRead, status_code=201)
def create_habit(
    payload: HabitCreate,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitStore = Depends(get_habit_store),
):
    return store.create_habit(user_id, payload.title, payload.target_frequency)


@router.get("/{habit_id}", response_model=HabitRead)
def get_habit(
    habit_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitStore = Depends(get_habit_store),
):
    return store.find_habit(habit_id, user_id)


@router.patch("/{habit_id}", response_model=HabitRead)
def update_habit(
    habit_id: UUID,
    payload: HabitUpdate,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitStore = Depends(get_habit_store),
):
    return store.update_habit(
        habit_id, user_id, title=payload.title, archived=payload.archived
    )


@router.delete("/{habit_id}", status_code=204)
def delete_habit(
    habit_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitStore = Depends(get_habit_store),
):
    store.delete_habit(habit_id, user_id)
    return Response(status_code=204)


@router.get("/{habit_id}/stats", response_model=HabitStatsRead)
def get_habit_stats(
    habit_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    logs_store: HabitLogStore = Depends(get_habit_log_store),
    clock: Clock = Depends(get_clock),
):
    # Recomputed from the full history on every call
    logs = logs_store.all_logs(habit_id, user_id)
    stats = summarize(logs, today=clock.today())
    return HabitStatsRead(
        habit_id=habit_id,
        total_completions=stats.total_completions,
        completion_rate=stats.completion_rate,
        weekly_completions=stats.weekly_completions,
        streak=StreakRead.model_validate(stats.streak),
    )


@router.get("/{habit_id}/logs", response_model=HabitLogListResponse)
def list_habit_logs(
    habit_id: UUID,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: Optional[int] = Query(None),
    offset: int = Query(0),
    user_id: UUID = Depends(get_current_user_id),
    store: HabitLogStore = Depends(get_habit_log_store),
):
    rq = RangeQuery(start_date, end_date, limit, offset).validated(
        store.config.habit_log_default_limit, store.config.max_page_limit
    )
    logs = store.query_logs(habit_id, user_id, rq)
    return HabitLogListResponse(
        logs=[HabitLogRead.model_validate(log) for log in logs],
        total=len(logs),
        pagination=Pagination(
            limit=rq.limit, offset=rq.offset, has_more=len(logs) == rq.limit
        ),
    )


@router.post("/{habit_id}/logs", response_model=HabitLogRead, status_code=201)
def upsert_habit_log(
    habit_id: UUID,
    payload: HabitLogCreate,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitLogStore = Depends(get_habit_log_store),
):
    # Same (habit, day) twice overwrites the first write
    return store.upsert_log(
        habit_id, user_id, payload.log_date, payload.completed, payload.count
    )


@router.get("/{habit_id}/logs/{log_id}", response_model=HabitLogRead)
def get_habit_log(
    habit_id: UUID,
    log_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitLogStore = Depends(get_habit_log_store),
):
    return store.find_log(log_id, habit_id, user_id)


@router.delete("/{habit_id}/logs/{log_id}", status_code=204)
def delete_habit_log(
    habit_id: UUID,
    log_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    store: HabitLogStore = Depends(get_habit_log_store),
):
    store.delete_log(log_id, habit_id, user_id)
    return Response(status_code=204)
