# tests/conftest.py
import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["ENV"] = "test"

import mongomock
import pytest
from fastapi.testclient import TestClient

from database import connection
from main import app


@pytest.fixture()
def db():
    """Base en memoria (mongomock) con los mismos índices que producción."""
    mock_db = mongomock.MongoClient()["taskboard_test"]
    connection.set_database(mock_db)
    connection.init_db()
    yield mock_db
    connection.set_database(None)


@pytest.fixture()
def client(db) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def register(client):
    """Registra un usuario y devuelve (user, headers)."""
    def _register(name="Ann", email="a@x.com", password="secret1"):
        resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        data = resp.json()["data"]
        return data["user"], {"Authorization": f"Bearer {data['token']}"}
    return _register


@pytest.fixture()
def ann(register):
    return register()


@pytest.fixture()
def bob(register):
    return register(name="Bob", email="b@x.com", password="secret2")
