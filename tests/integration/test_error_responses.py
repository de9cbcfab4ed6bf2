from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from rocketfist.dependencies import get_db
from rocketfist.errors.base_errors import InternalError
from rocketfist.main import app

GENERIC_BODY = {"error": "Something went wrong"}


@pytest.fixture
def lenient_client(db_session):
    """Client that turns unhandled server errors into responses instead of raising."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.mark.parametrize(
    "error",
    [
        SQLAlchemyError("connection to 10.0.0.5 refused"),
        OperationalError("SELECT * FROM gyms", {}, Exception("password authentication failed")),
    ],
)
def test_database_error_is_generic_500(lenient_client: TestClient, test_gym, error):
    with patch("rocketfist.services.gym.gym_crud.get_gym", side_effect=error):
        response = lenient_client.get(f"/gyms/{test_gym.id}/classes")

    assert response.status_code == 500
    assert response.json() == GENERIC_BODY


def test_internal_error_message_not_leaked(lenient_client: TestClient, test_gym):
    with patch("rocketfist.services.gym.gym_crud.get_gym", side_effect=InternalError("pool exhausted")):
        response = lenient_client.get(f"/gyms/{test_gym.id}/schedule", params={"start": "2030-01-01", "end": "2030-01-07"})

    assert response.status_code == 500
    assert response.json() == GENERIC_BODY


def test_unexpected_exception_is_generic_500(lenient_client: TestClient, test_gym):
    with patch(
        "rocketfist.services.revenue.payment_crud.sum_succeeded_by_currency",
        side_effect=RuntimeError("unexpected state in aggregation"),
    ):
        response = lenient_client.get(
            f"/gyms/{test_gym.id}/stats/revenue", params={"from": "2024-03-01", "to": "2024-03-31"}
        )

    assert response.status_code == 500
    assert response.json() == GENERIC_BODY
    assert "aggregation" not in response.text


def test_unexpected_exception_on_mutation(lenient_client: TestClient, test_gym, test_template, staff_headers):
    with patch(
        "rocketfist.services.class_template.template_crud.update_class_template",
        side_effect=KeyError("is_active"),
    ):
        response = lenient_client.patch(
            f"/gyms/{test_gym.id}/classes/{test_template.id}",
            json={"is_active": False},
            headers=staff_headers,
        )

    assert response.status_code == 500
    assert response.json() == GENERIC_BODY
