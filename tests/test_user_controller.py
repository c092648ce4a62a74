from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from firestore_users.api.v1.dependencies import get_firestore_connection, get_user_service
from firestore_users.application.services.user_service import UserService
from firestore_users.domain.exceptions import UserStoreError
from firestore_users.main import create_application

BASE = "/api/v1/users"


@pytest.fixture()
def client(service: UserService) -> TestClient:
    application = create_application()
    application.dependency_overrides[get_user_service] = lambda: service
    return TestClient(application)


def _create(client: TestClient, name: str, email: str, age: int) -> dict:
    response = client.post(BASE, json={"name": name, "email": email, "age": age})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_user(client: TestClient) -> None:
    created = _create(client, "John Doe", "john@example.com", 30)

    response = client.get(f"{BASE}/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "John Doe"
    assert body["email"] == "john@example.com"
    assert body["age"] == 30
    assert "created_at" in body and "updated_at" in body

    by_email = client.get(f"{BASE}/by-email", params={"email": "john@example.com"})
    assert by_email.json()["id"] == created["id"]


def test_error_statuses(client: TestClient) -> None:
    _create(client, "John Doe", "john@example.com", 30)

    invalid = client.post(BASE, json={"name": "J", "email": "john2@example.com", "age": 30})
    duplicate = client.post(BASE, json={"name": "Other John", "email": "john@example.com", "age": 40})
    missing = client.get(f"{BASE}/65f0c0ffee0000000000beef")
    malformed = client.get(f"{BASE}/not-an-id")
    update_missing = client.put(
        f"{BASE}/65f0c0ffee0000000000beef",
        json={"name": "Jane Doe", "email": "jane@example.com", "age": 25},
    )

    assert invalid.status_code == 400
    assert "at least 2" in invalid.json()["detail"]
    assert duplicate.status_code == 409
    assert missing.status_code == 404
    assert malformed.status_code == 404
    assert update_missing.status_code == 404


def test_batch_create_and_list(client: TestClient) -> None:
    response = client.post(
        f"{BASE}/batch",
        json={"users": [
            {"name": "Jane Doe", "email": "jane@example.com", "age": 25},
            {"name": "Bob Stone", "email": "bob@example.com", "age": 35},
        ]},
    )

    assert response.status_code == 201
    assert len(response.json()) == 2
    assert len(client.get(BASE).json()) == 2


def test_queries(client: TestClient) -> None:
    _create(client, "John Doe", "john@example.com", 20)
    _create(client, "Joanna Lee", "joanna@example.com", 30)
    _create(client, "Bob Stone", "bob@example.com", 40)

    search = client.get(f"{BASE}/search", params={"name": "jo"})
    age_range = client.get(f"{BASE}/age-range", params={"min_age": 25, "max_age": 35})
    bad_range = client.get(f"{BASE}/age-range", params={"min_age": 10, "max_age": 5})
    stats = client.get(f"{BASE}/statistics")

    assert sorted(u["name"] for u in search.json()) == ["Joanna Lee", "John Doe"]
    assert [u["age"] for u in age_range.json()] == [30]
    assert bad_range.status_code == 400
    assert stats.json() == {"total_users": 3, "average_age": 30.0, "min_age": 20, "max_age": 40}


def test_update_and_exists(client: TestClient) -> None:
    john = _create(client, "John Doe", "john@example.com", 30)
    jane = _create(client, "Jane Doe", "jane@example.com", 25)

    updated = client.put(
        f"{BASE}/{john['id']}", json={"name": "Johnny Doe", "email": "john@example.com", "age": 31}
    )
    taken = client.patch(f"{BASE}/{john['id']}/email", json={"email": jane["email"]})
    changed = client.patch(f"{BASE}/{john['id']}/email", json={"email": "johnny@example.com"})

    assert updated.json() == {"user_id": john["id"], "updated": True}
    assert taken.status_code == 409
    assert changed.json()["updated"] is True
    assert client.get(f"{BASE}/email-exists", params={"email": "johnny@example.com"}).json() == {"exists": True}
    assert client.get(f"{BASE}/{john['id']}/exists").json() == {"exists": True}


def test_delete_endpoints(client: TestClient) -> None:
    john = _create(client, "John Doe", "john@example.com", 30)
    _create(client, "Old Timer", "old@example.com", 70)

    unconfirmed = client.delete(f"{BASE}/age-range", params={"min_age": 40, "max_age": 150})
    confirmed = client.delete(
        f"{BASE}/age-range", params={"min_age": 40, "max_age": 150, "confirm": "true"}
    )
    deleted = client.delete(f"{BASE}/{john['id']}")
    again = client.delete(f"{BASE}/{john['id']}")

    assert unconfirmed.status_code == 400
    assert confirmed.json() == {"min_age": 40, "max_age": 150, "deleted_count": 1}
    assert deleted.json()["status"] == "deleted"
    assert again.status_code == 404
    assert client.get(f"{BASE}/{john['id']}/exists").json() == {"exists": False}


def test_store_failure_maps_to_503() -> None:
    failing = MagicMock(spec=UserService)
    failing.get_all_users.side_effect = UserStoreError("Failed to find all users")
    application = create_application()
    application.dependency_overrides[get_user_service] = lambda: failing

    response = TestClient(application).get(BASE)

    assert response.status_code == 503


@pytest.mark.parametrize("healthy, expected", [(True, "healthy"), (False, "unhealthy")])
def test_health(healthy: bool, expected: str) -> None:
    connection = MagicMock()
    connection.test_connection.return_value = healthy
    application = create_application()
    application.dependency_overrides[get_firestore_connection] = lambda: connection

    response = TestClient(application).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == expected
