# backend/app/api/budgets.py
from fastapi import APIRouter, Body, Depends

from backend.app.api.deps import get_store
from backend.app.schemas import validate, validate_patch
from backend.app.store import RecordStore

router = APIRouter()


@router.get("")
def view_budgets(store: RecordStore = Depends(get_store)):
    return store.list_all("budgets")


@router.post("")
def add_budget(payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.insert("budgets", validate("budgets", payload))


@router.put("/{budget_id}")
def update_budget(budget_id: str, payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.update("budgets", budget_id, validate_patch("budgets", payload))


@router.delete("/{budget_id}")
def delete_budget(budget_id: str, store: RecordStore = Depends(get_store)):
    store.delete("budgets", budget_id)
    return {"success": True}
