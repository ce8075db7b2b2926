import json

import pytest

from backend.app.errors import NotFound, StoreUnavailable
from backend.app.store import KINDS, JsonFileStore, SqlRecordStore


def entry(amount=10.0, **extra):
    record = {"amount": amount, "type": "expense", "category": "Umum", "date": "2025-01-01T00:00:00.000Z", "note": ""}
    record.update(extra)
    return record


def test_insert_assigns_id_and_created_at(store):
    stored = store.insert("entries", entry())

    assert stored["id"]
    assert stored["createdAt"].endswith("Z")
    assert store.list_all("entries") == [stored]


def test_collections_are_independent(store):
    store.insert("tags", {"name": "food", "color": "#007bff"})
    assert store.list_all("entries") == []
    assert len(store.list_all("tags")) == 1


def test_update_changes_only_supplied_fields(store):
    stored = store.insert("entries", entry(note="before"))

    updated = store.update("entries", stored["id"], {"amount": 99.0})

    assert updated["amount"] == 99.0
    assert updated["note"] == "before"
    assert updated["id"] == stored["id"]
    assert store.list_all("entries")[0]["amount"] == 99.0


def test_update_missing_record(store):
    with pytest.raises(NotFound):
        store.update("entries", "nope", {"amount": 1.0})


def test_delete(store):
    stored = store.insert("goals", {"name": "Car", "targetAmount": 500.0, "currentAmount": 0, "targetDate": None})

    store.delete("goals", stored["id"])

    assert store.list_all("goals") == []
    with pytest.raises(NotFound):
        store.delete("goals", stored["id"])


def test_insert_many(store):
    stored = store.insert_many("entries", [entry(1.0), entry(2.0), entry(3.0)])

    assert len({r["id"] for r in stored}) == 3
    assert sorted(r["amount"] for r in store.list_all("entries")) == [1.0, 2.0, 3.0]
    assert store.insert_many("entries", []) == []


def test_unknown_kind(store):
    with pytest.raises(ValueError):
        store.list_all("invoices")


def test_sql_store_is_selected_by_database_url(sql_store):
    assert isinstance(sql_store, SqlRecordStore)


def test_json_store_lists_newest_first(json_store):
    first = json_store.insert("entries", entry(1.0))
    second = json_store.insert("entries", entry(2.0))

    assert [r["id"] for r in json_store.list_all("entries")] == [second["id"], first["id"]]


def test_json_document_layout(json_store):
    json_store.insert("budgets", {"category": "Makan", "amount": 100.0, "month": "2025-01"})

    doc = json.loads(json_store.path.read_text(encoding="utf-8"))

    assert set(doc) == set(KINDS)
    assert doc["budgets"][0]["category"] == "Makan"


def test_json_store_never_hands_out_its_state(json_store):
    stored = json_store.insert("entries", entry())
    stored["amount"] = 12345

    listed = json_store.list_all("entries")
    listed[0]["amount"] = 54321

    assert json_store.list_all("entries")[0]["amount"] == 10.0


def test_json_store_missing_file_is_empty(tmp_path):
    store = JsonFileStore(tmp_path / "missing.json")
    assert all(store.list_all(kind) == [] for kind in KINDS)


def test_json_store_corrupt_file(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreUnavailable):
        JsonFileStore(path).list_all("entries")


def test_insert_many_lists_in_batch_order(store):
    store.insert_many("entries", [entry(1.0), entry(2.0), entry(3.0)])

    assert [r["amount"] for r in store.list_all("entries")] == [1.0, 2.0, 3.0]


def test_json_store_rejects_non_object_document(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(StoreUnavailable):
        JsonFileStore(path).list_all("entries")
