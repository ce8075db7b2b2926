# backend/app/api/recurring.py
from fastapi import APIRouter, Body, Depends

from backend.app.api.deps import get_store
from backend.app.schemas import validate, validate_patch
from backend.app.store import RecordStore

# Templates only: nothing here turns them into entries.
router = APIRouter()


@router.get("")
def list_recurring(store: RecordStore = Depends(get_store)):
    return store.list_all("recurring")


@router.post("")
def add_recurring(payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.insert("recurring", validate("recurring", payload))


@router.put("/{recurring_id}")
def update_recurring(recurring_id: str, payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.update("recurring", recurring_id, validate_patch("recurring", payload))


@router.delete("/{recurring_id}")
def delete_recurring(recurring_id: str, store: RecordStore = Depends(get_store)):
    store.delete("recurring", recurring_id)
    return {"success": True}
