"""
Pytest fixtures for FitTrack tests.
"""
import os
import tempfile
from pathlib import Path

# Settings are read at import time - keep bcrypt cheap and the default
# database out of the working directory before anything imports fittrack
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_PATH", str(Path(tempfile.gettempdir()) / "fittrack-test-database.json"))

import pytest
from fastapi.testclient import TestClient

from fittrack.core.database import get_store
from fittrack.main import app
from fittrack.services.account_service import account_service
from fittrack.storage.json_store import JsonDocumentStore

PASSWORD = "supersecret"


@pytest.fixture
def store(tmp_path):
    """Fresh store backed by a file in the test's temp directory"""
    json_store = JsonDocumentStore(tmp_path / "database.json")
    json_store.initialize()
    return json_store


@pytest.fixture
def user(store):
    return account_service.register(store, "runner@gmail.com", PASSWORD, "Road Runner")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
