# backend/app/api/goals.py
from fastapi import APIRouter, Body, Depends

from backend.app.aggregation import goal_progress
from backend.app.api.deps import get_store
from backend.app.schemas import validate, validate_patch
from backend.app.store import RecordStore

router = APIRouter()


@router.get("")
def list_goals(store: RecordStore = Depends(get_store)):
    """
    Savings goals, each with a computed `progress` percentage (not stored).
    """
    return [{**g, "progress": goal_progress(g)} for g in store.list_all("goals")]


@router.post("")
def add_goal(payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.insert("goals", validate("goals", payload))


@router.put("/{goal_id}")
def update_goal(goal_id: str, payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.update("goals", goal_id, validate_patch("goals", payload))


@router.delete("/{goal_id}")
def delete_goal(goal_id: str, store: RecordStore = Depends(get_store)):
    store.delete("goals", goal_id)
    return {"success": True}
