# backend/app/spreadsheet.py
"""
CSV / XLSX export and import of transactions.

Exported layout, one row per entry:

    id,amount,type,category,date,note

CSV output always double-quotes category and note (doubling embedded quotes) and
leaves the other fields bare. XLSX output is a single sheet named "Entries".
Imports accept either format, sniffed from the content, and skip rows that
do not form a valid entry instead of failing the whole file.
"""
import io
import logging
import math

import pandas as pd

from backend.app.errors import DecodeFailure, InvalidPayload
from backend.app.schemas import TRANSACTION_TYPES, now_iso, to_iso, validate

logger = logging.getLogger(__name__)

COLUMNS = ["id", "amount", "type", "category", "date", "note"]
SHEET_NAME = "Entries"
MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

# xlsx files are zip packages
ZIP_SIGNATURE = b"PK\x03\x04"


def _project(record: dict) -> dict:
    return {col: record.get(col) for col in COLUMNS}


def _format_number(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _bare(value) -> str:
    return "" if value is None else str(value)


def _quoted(value) -> str:
    return '"' + _bare(value).replace('"', '""') + '"'


def encode_csv(records) -> bytes:
    lines = [",".join(COLUMNS)]
    for r in records:
        lines.append(",".join([
            _bare(r.get("id")),
            _format_number(r.get("amount")),
            _bare(r.get("type")),
            _quoted(r.get("category")),
            _bare(r.get("date")),
            _quoted(r.get("note")),
        ]))
    return "\n".join(lines).encode("utf-8")


def encode_xlsx(records) -> bytes:
    df = pd.DataFrame([_project(r) for r in records], columns=COLUMNS)
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return buf.getvalue()


def encode(records, fmt: str = "xlsx") -> bytes:
    if fmt == "csv":
        return encode_csv(records)
    if fmt == "xlsx":
        return encode_xlsx(records)
    raise InvalidPayload(f"Unsupported export format: {fmt}")


def _read_frame(data: bytes) -> pd.DataFrame:
    if not data:
        raise DecodeFailure("Uploaded file is empty")
    try:
        if data[:4] == ZIP_SIGNATURE:
            # first sheet only
            return pd.read_excel(io.BytesIO(data), sheet_name=0, dtype=object)
        text = data.decode("utf-8-sig")
        return pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, on_bad_lines="skip")
    except Exception as e:
        raise DecodeFailure(f"Unable to read file: {e}") from e


def _cell(row: dict, columns: dict, name: str):
    col = columns.get(name)
    if col is None:
        return None
    value = row[col]
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    # whitespace is kept; only an empty cell counts as missing
    if isinstance(value, str) and value == "":
        return None
    return value


def _parse_amount(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value if isinstance(value, (int, float)) else str(value).strip())
    except ValueError:
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def _parse_date(value) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return now_iso()
    ts = pd.to_datetime(value, utc=True)
    if pd.isna(ts):
        raise ValueError(f"not a date: {value!r}")
    return to_iso(ts.to_pydatetime())


def _row_to_entry(row: dict, columns: dict):
    amount = _parse_amount(_cell(row, columns, "amount"))
    kind = _cell(row, columns, "type")
    kind = str(kind).strip().lower() if kind is not None else ""
    if amount is None or kind not in TRANSACTION_TYPES:
        return None

    try:
        date = _parse_date(_cell(row, columns, "date"))
    except (ValueError, TypeError, OverflowError):
        return None

    category = _cell(row, columns, "category")
    note = _cell(row, columns, "note")
    candidate = {
        "amount": amount,
        "type": kind,
        "category": str(category) if category is not None else None,
        "date": date,
        "note": str(note) if note is not None else None,
    }
    try:
        return validate("entries", candidate)
    except InvalidPayload:
        return None


def decode(data: bytes):
    """
    Parse an uploaded CSV or XLSX file into validated entry records.
    Returns (records, added). Column names are matched case-insensitively and
    any id column is ignored. Rows with a bad amount, type or date are skipped.
    Raises DecodeFailure only when the file itself cannot be read.
    """
    frame = _read_frame(data)

    columns = {}
    for col in frame.columns:
        columns.setdefault(str(col).strip().lower(), col)

    records = []
    rows = frame.to_dict("records")
    for row in rows:
        entry = _row_to_entry(row, columns)
        if entry is not None:
            records.append(entry)

    logger.info("Decoded %d of %d rows", len(records), len(rows))
    return records, len(records)
