# backend/app/store.py
"""
Record persistence. Five independent collections, keyed by opaque id:

    entries, budgets, recurring, goals, tags

Two interchangeable backends sit behind RecordStore: a single JSON document on
local disk, and SQL tables through SQLAlchemy when DATABASE_URL is configured.
Callers always get plain dicts back and never hold a reference into the
backend's own state.
"""
import json
import logging
import os
from datetime import datetime, timedelta, timezone
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from backend.app.db import make_engine, make_session_factory, init_db, new_id
from backend.app.errors import NotFound, StoreUnavailable
from backend.app.models.transaction_model import Transaction
from backend.app.models.budget_model import Budget
from backend.app.models.recurring_model import RecurringTemplate
from backend.app.models.goal_model import Goal
from backend.app.models.tag_model import Tag
from backend.app.schemas import to_iso

logger = logging.getLogger(__name__)

KINDS = ("entries", "budgets", "recurring", "goals", "tags")


def _check_kind(kind: str):
    if kind not in KINDS:
        raise ValueError(f"unknown record kind: {kind}")


def _stamp_all(records) -> list:
    # Earlier rows of a batch get later timestamps, so newest-first listing keeps batch order
    base = datetime.now(timezone.utc)
    stamped = []
    for offset, record in enumerate(records):
        row = dict(record)
        row["id"] = new_id()
        row["createdAt"] = to_iso(base - timedelta(milliseconds=offset))
        stamped.append(row)
    return stamped


class RecordStore(ABC):
    @abstractmethod
    def list_all(self, kind: str) -> list:
        """Every record of a kind, newest first."""

    @abstractmethod
    def insert(self, kind: str, record: dict) -> dict:
        """Store a validated record, assigning id and createdAt."""

    @abstractmethod
    def insert_many(self, kind: str, records: list) -> list:
        ...

    @abstractmethod
    def update(self, kind: str, record_id: str, fields: dict) -> dict:
        """Patch only the supplied fields. Raises NotFound."""

    @abstractmethod
    def delete(self, kind: str, record_id: str) -> None:
        """Raises NotFound."""


class JsonFileStore(RecordStore):
    """The whole database is one JSON document, re-read and replaced on every call."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {kind: [] for kind in KINDS}
        try:
            with open(self.path, encoding="utf-8") as fh:
                doc = json.load(fh)
        except (OSError, ValueError) as e:
            logger.exception("Unable to read %s", self.path)
            raise StoreUnavailable("Unable to read data file") from e
        if not isinstance(doc, dict):
            logger.error("Data file %s does not hold a JSON object", self.path)
            raise StoreUnavailable("Data file is malformed")
        for kind in KINDS:
            doc.setdefault(kind, [])
        return doc

    def _write(self, doc: dict):
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as fh:
                json.dump(doc, fh, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.exception("Unable to write %s", self.path)
            raise StoreUnavailable("Unable to save data file") from e

    def list_all(self, kind):
        _check_kind(kind)
        return self._read()[kind]

    def insert(self, kind, record):
        return self.insert_many(kind, [record])[0]

    def insert_many(self, kind, records):
        _check_kind(kind)
        stamped = _stamp_all(records)
        if not stamped:
            return []
        doc = self._read()
        doc[kind][:0] = stamped
        self._write(doc)
        return [dict(r) for r in stamped]

    def update(self, kind, record_id, fields):
        _check_kind(kind)
        doc = self._read()
        for idx, existing in enumerate(doc[kind]):
            if existing.get("id") == record_id:
                updated = {**existing, **fields}
                doc[kind][idx] = updated
                self._write(doc)
                return dict(updated)
        raise NotFound(f"No {kind} record with id {record_id}")

    def delete(self, kind, record_id):
        _check_kind(kind)
        doc = self._read()
        before = len(doc[kind])
        doc[kind] = [r for r in doc[kind] if r.get("id") != record_id]
        if len(doc[kind]) == before:
            raise NotFound(f"No {kind} record with id {record_id}")
        self._write(doc)


MODELS = {
    "entries": Transaction,
    "budgets": Budget,
    "recurring": RecurringTemplate,
    "goals": Goal,
    "tags": Tag,
}


def _columns(model) -> dict:
    # wire/column name -> mapped attribute name, e.g. "createdAt" -> "created_at"
    return {prop.columns[0].name: prop.key for prop in inspect(model).column_attrs}


def _to_record(row) -> dict:
    return {name: getattr(row, attr) for name, attr in _columns(type(row)).items()}


class SqlRecordStore(RecordStore):
    """One table per kind; one session per operation."""

    def __init__(self, session_factory):
        self.SessionLocal = session_factory

    def _run(self, action: str, work):
        db = self.SessionLocal()
        try:
            result = work(db)
            db.commit()
            return result
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Database error while trying to %s", action)
            raise StoreUnavailable(f"Unable to {action}") from e
        finally:
            db.close()

    def list_all(self, kind):
        _check_kind(kind)
        model = MODELS[kind]

        def work(db):
            rows = db.query(model).order_by(model.created_at.desc()).all()
            return [_to_record(r) for r in rows]

        return self._run(f"read {kind}", work)

    def insert(self, kind, record):
        return self.insert_many(kind, [record])[0]

    def insert_many(self, kind, records):
        _check_kind(kind)
        model = MODELS[kind]
        columns = _columns(model)

        def work(db):
            rows = []
            for stamped in _stamp_all(records):
                row = model(**{columns[k]: v for k, v in stamped.items() if k in columns})
                db.add(row)
                rows.append(row)
            db.flush()
            return [_to_record(r) for r in rows]

        return self._run(f"save {kind}", work)

    def update(self, kind, record_id, fields):
        _check_kind(kind)
        model = MODELS[kind]
        columns = _columns(model)

        def work(db):
            row = db.get(model, record_id)
            if row is None:
                raise NotFound(f"No {kind} record with id {record_id}")
            for name, value in fields.items():
                if name in columns and name != "id":
                    setattr(row, columns[name], value)
            db.flush()
            return _to_record(row)

        return self._run(f"update {kind}", work)

    def delete(self, kind, record_id):
        _check_kind(kind)
        model = MODELS[kind]

        def work(db):
            deleted = db.query(model).filter(model.id == record_id).delete()
            if not deleted:
                raise NotFound(f"No {kind} record with id {record_id}")

        self._run(f"delete {kind}", work)


def create_store(settings) -> RecordStore:
    """Pick the backend once at startup: SQL when a database URL is configured, else the JSON file."""
    if settings.use_database:
        try:
            engine = make_engine(settings.database_url)
            init_db(engine)
        except SQLAlchemyError as e:
            logger.exception("Unable to open database")
            raise StoreUnavailable("Unable to open database") from e
        logger.info("Using SQL record store")
        return SqlRecordStore(make_session_factory(engine))
    logger.info("Using JSON record store at %s", settings.data_path)
    return JsonFileStore(settings.data_path)
