# backend/app/api/entries.py
import io
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from backend.app.aggregation import filter_by_month, summary
from backend.app.api.deps import get_store
from backend.app.errors import InvalidPayload
from backend.app.schemas import validate, validate_patch
from backend.app.spreadsheet import MEDIA_TYPES, decode, encode
from backend.app.store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/entries")
def list_entries(store: RecordStore = Depends(get_store)):
    return store.list_all("entries")


@router.post("/entries")
def add_entry(payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.insert("entries", validate("entries", payload))


@router.put("/entries/{entry_id}")
def update_entry(entry_id: str, payload: dict = Body(...), store: RecordStore = Depends(get_store)):
    return store.update("entries", entry_id, validate_patch("entries", payload))


@router.delete("/entries/{entry_id}")
def delete_entry(entry_id: str, store: RecordStore = Depends(get_store)):
    store.delete("entries", entry_id)
    return {"success": True}


@router.get("/summary")
def get_summary(month: Optional[str] = None, store: RecordStore = Depends(get_store)):
    """
    Income, expense, balance and count over all entries,
    or only those dated in `month` (YYYY-MM) when given.
    """
    entries = store.list_all("entries")
    if month:
        entries = filter_by_month(entries, month)
    return summary(entries)


@router.get("/export")
def export_entries(
    fmt: str = Query("xlsx", alias="format"),
    month: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    """
    Download entries as CSV or XLSX, optionally only one month (YYYY-MM).
    """
    entries = store.list_all("entries")
    if month:
        entries = filter_by_month(entries, month)
    data = encode(entries, fmt)

    filename = f"entries{'-' + month if month else ''}.{fmt}"
    return StreamingResponse(
        io.BytesIO(data),
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import")
def import_entries(file: Optional[UploadFile] = File(None), store: RecordStore = Depends(get_store)):
    """
    Upload a CSV or XLSX file with columns: amount, type, (optional) category, date, note.
    Rows that are not valid entries are skipped; `added` counts the ones saved.
    """
    if file is None:
        raise InvalidPayload("File not found")

    records, added = decode(file.file.read())
    store.insert_many("entries", records)
    logger.info("Imported %d entries from %s", added, file.filename)
    return {"added": added}
