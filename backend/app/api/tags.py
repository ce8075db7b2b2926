# backend/app/api/tags.py
from fastapi import APIRouter, Body, Depends

from backend.app.api.deps import get_store
from backend.app.schemas import validate, validate_patch
from backend.app.store import RecordStore

router = APIRouter()


@router.get("")
def list_tags(store: RecordStore = Depends(get_store)):
    return store.list_all("tags")


@router.post("")
def add_tag(payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.insert("tags", validate("tags", payload))


@router.put("/{tag_id}")
def update_tag(tag_id: str, payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.update("tags", tag_id, validate_patch("tags", payload))


@router.delete("/{tag_id}")
def delete_tag(tag_id: str, store: RecordStore = Depends(get_store)):
    store.delete("tags", tag_id)
    return {"success": True}
