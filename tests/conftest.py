import functools

import pytest
from fastapi.testclient import TestClient

from delivery.config import Settings
from delivery.main import create_app
from delivery.users.bootstrap import create_master

TEST_SECRET = "test-secret-key-for-the-delivery-platform-suite"
PASSWORD = "Passw0rd!"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="local",
        database_url=f"sqlite+aiosqlite:///{tmp_path}/test.db",
        secret_key=TEST_SECRET,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    # entering the client runs the lifespan, which creates the schema
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def signup(client):
    def _signup(username, password=PASSWORD, email=None, nickname=None):
        r = client.post(
            "/api/user/signup",
            json={
                "username": username,
                "email": email or f"{username}@mail.com",
                "password": password,
                "nickname": nickname or username,
            },
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _signup


@pytest.fixture
def signin(client):
    def _signin(username, password=PASSWORD):
        r = client.post("/api/user/signin", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return r.json()

    return _signin


@pytest.fixture
def auth(signin):
    def _auth(username, password=PASSWORD):
        return {"Authorization": f"Bearer {signin(username, password)['access_token']}"}

    return _auth


@pytest.fixture
def master(client, auth):
    """Headers of a bootstrapped MASTER account ("root")."""
    state = client.app.state
    client.portal.call(
        functools.partial(
            create_master,
            state.database,
            state.password_hasher,
            username="root",
            email="root@mail.com",
            password=PASSWORD,
            nickname="Root",
        )
    )
    return auth("root")


@pytest.fixture
def manager(client, signup, auth, master):
    """Headers of a MANAGER account ("boss"), promoted by root."""
    account = signup("boss")
    r = client.patch(f"/api/user/{account['id']}/role", json={"role": "MANAGER"}, headers=master)
    assert r.status_code == 200, r.text
    return auth("boss")
