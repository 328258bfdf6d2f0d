import pytest
from fastapi.testclient import TestClient

import database
import main


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the store at a throwaway SQLite file."""
    path = str(tmp_path / "gastroguard-test.db")
    monkeypatch.setattr(database, "DATABASE_PATH", path)
    database.init_database()
    return path


@pytest.fixture
def client(db_path):
    with TestClient(main.app) as c:
        yield c


@pytest.fixture
def entry():
    """Factory for log entry dicts with sensible defaults."""
    def _make(**overrides):
        data = {
            "date": "2026-10-18",
            "time": "12:00:00",
            "pain_level": 0,
            "stress_level": 0,
            "symptoms": [],
            "triggers": [],
            "remedies": [],
            "notes": "",
            "meal": "",
        }
        data.update(overrides)
        return data
    return _make
