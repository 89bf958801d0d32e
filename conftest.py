import pytest
from fastapi.testclient import TestClient

from worldbuilder.database import Store
from worldbuilder.main import create_app

TEST_USER = {"username": "loremaster", "email": "lore@example.com", "password": "correct-horse"}


@pytest.fixture
def store(tmp_path):
    """A fresh SQLite file per test."""
    store = Store(f"sqlite:///{tmp_path / 'worldbuilder-test.db'}").open()
    yield store
    store.close()


@pytest.fixture
def db(store):
    session = store.session()
    yield session
    session.close()


@pytest.fixture
def anon_client(store):
    with TestClient(create_app(store=store)) as client:
        yield client


@pytest.fixture
def client(anon_client):
    """Client carrying a signed-in session cookie."""
    response = anon_client.post("/api/auth/register", json=TEST_USER)
    assert response.status_code == 201, response.text
    return anon_client


def create_world(client, name="Aldoria", **fields):
    response = client.post("/api/world", json={"op": "createWorld", "name": name, **fields})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def world_op(client, op, **fields):
    return client.post("/api/world", json={"op": op, **fields})


def era_op(client, op, **fields):
    return client.post("/api/world/eras", json={"op": op, **fields})
