import pytest
from fastapi.testclient import TestClient

from backend.app.config import Settings
from backend.app.main import create_app
from backend.app.store import JsonFileStore, create_store


def make_settings(tmp_path, **overrides):
    settings = Settings()
    settings.database_url = None
    settings.data_path = str(tmp_path / "db.json")
    settings.static_dir = str(tmp_path / "no-static")
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


@pytest.fixture
def settings_factory(tmp_path):
    return lambda **overrides: make_settings(tmp_path, **overrides)


@pytest.fixture
def json_store(tmp_path):
    return JsonFileStore(tmp_path / "data" / "db.json")


@pytest.fixture
def sql_store(tmp_path):
    return create_store(make_settings(tmp_path, database_url=f"sqlite:///{tmp_path / 'finance.db'}"))


@pytest.fixture(params=["json", "sql"])
def store(request, tmp_path):
    if request.param == "json":
        return request.getfixturevalue("json_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def client(tmp_path, json_store):
    app = create_app(settings=make_settings(tmp_path), store=json_store)
    return TestClient(app)


@pytest.fixture
def sample_entries():
    return [
        {"id": "a", "amount": 1000.0, "type": "income", "category": "Gaji", "date": "2025-01-05T08:00:00.000Z", "note": "salary"},
        {"id": "b", "amount": 400.0, "type": "expense", "category": "Makan", "date": "2025-01-12T12:30:00.000Z", "note": ""},
        {"id": "c", "amount": 250.0, "type": "expense", "category": "Makan", "date": "2025-02-01T19:00:00.000Z", "note": "dinner"},
        {"id": "d", "amount": 50.0, "type": "income", "category": "", "date": "2025-02-14T09:00:00.000Z", "note": ""},
    ]
