"""Daily goal endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from wellness.audit import record_audit
from wellness.errors import NotFound
from wellness.schemas import Goal, GoalCreate, GoalUpdate
from wellness.security import Identity, get_current_identity, verify_ownership
from wellness.store import RecordStore, get_store

router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.get("", response_model=List[Goal])
async def list_goals(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    goals = store.list_goals(identity.account_id)
    record_audit(store, identity.account_id, "viewGoals", target="goals", request=request)
    return goals


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    payload: GoalCreate,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    goal = store.create_goal(identity.account_id, payload)
    record_audit(
        store,
        identity.account_id,
        "createGoal",
        target=f"goal:{goal.id}",
        metadata={"goalType": goal.goal_type},
        request=request,
    )
    return goal


@router.put("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    verify_ownership(store.get_goal(goal_id), identity, kind="Goal")
    goal = store.update_goal(goal_id, payload)
    if goal is None:
        raise NotFound("Goal not found")
    record_audit(
        store,
        identity.account_id,
        "updateGoal",
        target=f"goal:{goal_id}",
        metadata={"newProgress": payload.progress_value},
        request=request,
    )
    return goal


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_goal(
    goal_id: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    store: RecordStore = Depends(get_store),
):
    verify_ownership(store.get_goal(goal_id), identity, kind="Goal")
    if not store.delete_goal(goal_id):
        raise NotFound("Goal not found")
    record_audit(store, identity.account_id, "deleteGoal", target=f"goal:{goal_id}", request=request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
