from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from apps.identity_api.main import create_app
from identity_service.application.ports.credential_store_port import CredentialStoreError
from identity_service.infrastructure.security.password_hasher import BcryptPasswordHasher


class InMemoryCredentialStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.confirm_writes = True
        self.read_error: Exception | None = None

    async def exists(self, key: str) -> bool:
        if self.read_error is not None:
            raise self.read_error
        return key in self.values

    async def get(self, key: str) -> str | None:
        if self.read_error is not None:
            raise self.read_error
        return self.values.get(key)

    async def set(self, key: str, value: str, *, only_if_absent: bool = False) -> bool:
        if not self.confirm_writes or (only_if_absent and key in self.values):
            return False
        self.values[key] = value
        return True


@pytest.fixture
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def client(store: InMemoryCredentialStore) -> Iterator[TestClient]:
    app = create_app(store=store, password_hasher=BcryptPasswordHasher(rounds=4))
    with TestClient(app) as test_client:
        yield test_client


def _register(client: TestClient, username: str, password: str) -> None:
    response = client.post("/user", json={"username": username, "password": password})
    assert response.status_code == 200


def test_routes_are_registered(store: InMemoryCredentialStore) -> None:
    app = create_app(store=store, password_hasher=BcryptPasswordHasher(rounds=4))

    paths = app.openapi()["paths"]

    assert "post" in paths["/user"]
    assert "post" in paths["/auth"]


def test_create_user_persists_hash_under_user_key(
    client: TestClient,
    store: InMemoryCredentialStore,
) -> None:
    response = client.post("/user", json={"username": "gooduser1", "password": "Str0ng!Pass"})

    assert response.status_code == 200
    assert response.json() == {"message": "User created"}
    assert list(store.values) == ["user:gooduser1"]
    assert store.values["user:gooduser1"] != "Str0ng!Pass"
    assert store.values["user:gooduser1"].startswith("$2b$04$")


def test_create_user_reports_all_validation_errors(client: TestClient) -> None:
    response = client.post("/user", json={"username": "a b", "password": "abc"})

    assert response.status_code == 400
    assert response.json() == {
        "errors": [
            {"param": "username", "message": "Username must be at least 6 characters long"},
            {
                "param": "username",
                "message": (
                    "Username must contain only alphanumeric characters "
                    "and special characters .-_@"
                ),
            },
            {"param": "password", "message": "Password must be at least 8 characters long"},
            {"param": "password", "message": "Password must contain at least one uppercase letter"},
            {"param": "password", "message": "Password must contain at least one number"},
            {
                "param": "password",
                "message": "Password must contain at least one special character",
            },
        ]
    }


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"username": "gooduser1"},
        {"password": "Str0ng!Pass"},
        {"username": "", "password": "Str0ng!Pass"},
        {"username": 123456, "password": "Str0ng!Pass"},
    ],
)
def test_create_user_requires_both_fields(client: TestClient, body: dict[str, object]) -> None:
    response = client.post("/user", json=body)

    assert response.status_code == 400
    assert response.json() == {
        "errors": [{"param": "username", "message": "Username and password are required"}]
    }


def test_create_user_rejects_unparseable_body_as_missing_fields(client: TestClient) -> None:
    response = client.post(
        "/user",
        content=b"not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["message"] == "Username and password are required"


def test_create_existing_user_returns_conflict_only(
    client: TestClient,
    store: InMemoryCredentialStore,
) -> None:
    _register(client, "gooduser1", "Str0ng!Pass")
    stored_hash = store.values["user:gooduser1"]

    response = client.post("/user", json={"username": "gooduser1", "password": "weak"})

    assert response.status_code == 409
    assert response.json() == {
        "errors": [{"param": "username", "message": "Username already exists"}]
    }
    assert store.values["user:gooduser1"] == stored_hash


def test_create_user_unconfirmed_write_returns_generic_500(
    client: TestClient,
    store: InMemoryCredentialStore,
) -> None:
    store.confirm_writes = False

    response = client.post("/user", json={"username": "gooduser1", "password": "Str0ng!Pass"})

    assert response.status_code == 500
    assert response.json() == {
        "errors": [{"param": "username", "message": "Unable to create user"}]
    }


def test_create_user_store_outage_returns_generic_500(
    client: TestClient,
    store: InMemoryCredentialStore,
) -> None:
    store.read_error = CredentialStoreError("credential store exists failed")

    response = client.post("/user", json={"username": "gooduser1", "password": "Str0ng!Pass"})

    assert response.status_code == 500
    assert response.json() == {
        "errors": [{"param": "username", "message": "Unable to create user"}]
    }


def test_auth_accepts_registered_credentials(client: TestClient) -> None:
    _register(client, "gooduser1", "Str0ng!Pass")

    response = client.post("/auth", json={"username": "gooduser1", "password": "Str0ng!Pass"})

    assert response.status_code == 200
    assert response.json() == {"message": "User authenticated"}


def test_auth_unknown_user_and_wrong_password_are_byte_identical(client: TestClient) -> None:
    _register(client, "gooduser1", "Str0ng!Pass")

    wrong_password = client.post(
        "/auth",
        json={"username": "gooduser1", "password": "Wr0ng!Pass"},
    )
    unknown_user = client.post(
        "/auth",
        json={"username": "nobody99", "password": "Str0ng!Pass"},
    )

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.content == unknown_user.content
    assert wrong_password.json() == {"error": "Invalid username or password"}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"username": "gooduser1"},
        {"password": "Str0ng!Pass"},
        {"username": "", "password": ""},
    ],
)
def test_auth_requires_both_fields(client: TestClient, body: dict[str, object]) -> None:
    response = client.post("/auth", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Username and password are required"}


def test_auth_store_outage_returns_generic_500(
    client: TestClient,
    store: InMemoryCredentialStore,
) -> None:
    store.read_error = CredentialStoreError("credential store get failed")

    response = client.post("/auth", json={"username": "gooduser1", "password": "Str0ng!Pass"})

    assert response.status_code == 500
    assert response.json() == {"error": "Unable to authenticate user"}
