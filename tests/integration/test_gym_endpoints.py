import uuid

from fastapi.testclient import TestClient


def test_list_gyms(client: TestClient, test_gym, other_gym):
    response = client.get("/gyms")
    assert response.status_code == 200
    slugs = {g["slug"] for g in response.json()}
    assert slugs == {"nova-combat-academy", "harbor-boxing-club"}
    assert set(response.json()[0].keys()) == {"id", "name", "slug", "timezone"}


def test_get_gym(client: TestClient, test_gym):
    response = client.get(f"/gyms/{test_gym.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Nova Combat Academy"
    assert response.json()["timezone"] == "UTC"


def test_get_gym_not_found(client: TestClient, test_gym):
    response = client.get(f"/gyms/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Gym not found"}


def test_get_gym_invalid_id(client: TestClient):
    response = client.get("/gyms/not-a-uuid")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid gym ID format"}


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"
