from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_clock, get_current_user_id, get_goal_store
from app.core.query import RangeQuery
from app.core.time_utils import Clock
from app.schemas.goal import (
    GoalCreate,
    GoalHistoryItem,
    GoalHistoryResponse,
    GoalRead,
    Pagination,
)
from app.stores.goal_store import GoalIntervalStore


router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=GoalRead)
def get_active_goal(
    as_of: Optional[date] = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    store: GoalIntervalStore = Depends(get_goal_store),
):
    goal = store.find_active_goal(user_id, as_of)
    if goal is None:
        raise HTTPException(status_code=404, detail="No active goal found")
    return goal


@router.post("", response_model=GoalRead, status_code=201)
def create_goal(
    payload: GoalCreate,
    user_id: UUID = Depends(get_current_user_id),
    store: GoalIntervalStore = Depends(get_goal_store),
):
    # Closes any goal still running on payload.start_date
    return store.create_goal(
        user_id,
        payload.target_protein,
        payload.start_date,
        payload.end_date,
    )


@router.get("/history", response_model=GoalHistoryResponse)
def get_goal_history(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: Optional[int] = Query(None),
    offset: int = Query(0),
    user_id: UUID = Depends(get_current_user_id),
    store: GoalIntervalStore = Depends(get_goal_store),
    clock: Clock = Depends(get_clock),
):
    """
    Previous goals, newest first, optionally filtered by start_date range.

      GET /goals/history?start_date=2024-01-01&end_date=2024-06-30&limit=10
    """
    rq = RangeQuery(start_date, end_date, limit, offset).validated(
        store.config.goal_history_default_limit, store.config.max_page_limit
    )
    goals = store.find_goal_history(user_id, rq)
    today = clock.today()
    items = [
        GoalHistoryItem.model_validate(g, from_attributes=True).model_copy(
            update={"is_active": g.contains(today)}
        )
        for g in goals
    ]
    return GoalHistoryResponse(
        goals=items,
        total=len(items),
        pagination=Pagination(
            limit=rq.limit,
            offset=rq.offset,
            has_more=len(items) == rq.limit,
        ),
    )


@router.get("/{goal_id}", response_model=GoalRead)
def get_goal(
    goal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    store: GoalIntervalStore = Depends(get_goal_store),
):
    return store.find_goal(goal_id, user_id)
