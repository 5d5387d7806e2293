"""Pytest configuration shared across gateway tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_gateway.config import get_settings
from task_gateway.db import init_db


@pytest.fixture(autouse=True)
def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the gateway at a fresh SQLite file for every test."""
    db_path = tmp_path / "tasks.db"
    monkeypatch.setenv("TASK_GATEWAY_DATABASE_PATH", str(db_path))
    get_settings.cache_clear()
    init_db()
    yield db_path
    get_settings.cache_clear()


@pytest.fixture
def client():
    from task_gateway.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
