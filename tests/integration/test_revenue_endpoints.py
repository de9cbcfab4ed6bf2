import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from rocketfist.models import PaymentStatus


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def payer(test_members):
    return test_members[0]


def _revenue(client, gym, **params):
    query = {"from": "2024-03-01", "to": "2024-03-31"}
    query.update(params)
    return client.get(f"/gyms/{gym.id}/stats/revenue", params=query)


def test_sums_succeeded_payments(client: TestClient, test_gym, payer, make_payment):
    make_payment(test_gym, payer, 14900, paid_at=_utc(2024, 3, 5, 12, 0))
    make_payment(test_gym, payer, 9900, paid_at=_utc(2024, 3, 20, 8, 30))

    response = _revenue(client, test_gym)

    assert response.status_code == 200
    assert response.json() == {
        "totalRevenueCents": 24800,
        "currency": "USD",
        "byCurrency": [{"currency": "USD", "totalRevenueCents": 24800}],
    }


def test_window_boundaries(client: TestClient, test_gym, payer, make_payment):
    make_payment(test_gym, payer, 100, paid_at=_utc(2024, 3, 1, 0, 0, 0))
    make_payment(test_gym, payer, 200, paid_at=_utc(2024, 3, 31, 23, 59, 59))
    make_payment(test_gym, payer, 400, paid_at=_utc(2024, 4, 1, 0, 0, 1))
    make_payment(test_gym, payer, 800, paid_at=_utc(2024, 2, 29, 23, 59, 59))

    response = _revenue(client, test_gym)

    assert response.json()["totalRevenueCents"] == 300


def test_excludes_unpaid_and_foreign_payments(client: TestClient, test_gym, other_gym, payer, make_payment):
    make_payment(test_gym, payer, 14900, paid_at=_utc(2024, 3, 5))
    make_payment(test_gym, payer, 5000, paid_at=_utc(2024, 3, 6), status=PaymentStatus.FAILED)
    make_payment(test_gym, payer, 5000, paid_at=_utc(2024, 3, 6), status=PaymentStatus.PENDING)
    make_payment(test_gym, payer, 5000, paid_at=None)
    make_payment(other_gym, payer, 7000, paid_at=_utc(2024, 3, 7))

    response = _revenue(client, test_gym)

    assert response.json()["totalRevenueCents"] == 14900


def test_empty_window_uses_default_currency(client: TestClient, test_gym):
    response = _revenue(client, test_gym)
    assert response.json() == {"totalRevenueCents": 0, "currency": "USD", "byCurrency": []}


def test_several_currencies_need_a_filter(client: TestClient, test_gym, payer, make_payment):
    make_payment(test_gym, payer, 14900, paid_at=_utc(2024, 3, 5))
    make_payment(test_gym, payer, 9000, paid_at=_utc(2024, 3, 6), currency="EUR")

    unfiltered = _revenue(client, test_gym)
    euros = _revenue(client, test_gym, currency="eur")

    assert unfiltered.status_code == 400
    assert "EUR, USD" in unfiltered.json()["error"]
    assert euros.status_code == 200
    assert euros.json()["totalRevenueCents"] == 9000
    assert euros.json()["currency"] == "EUR"


def test_gym_timezone_window(client: TestClient, db_session, test_gym, payer, make_payment):
    test_gym.timezone = "Europe/Berlin"
    db_session.commit()
    # 23:30 UTC on Feb 29 is already March 1st in Berlin
    make_payment(test_gym, payer, 1000, paid_at=_utc(2024, 2, 29, 23, 30))
    # 23:30 UTC on March 31 is April 1st in Berlin
    make_payment(test_gym, payer, 2000, paid_at=_utc(2024, 3, 31, 23, 30))

    response = _revenue(client, test_gym)

    assert response.json()["totalRevenueCents"] == 1000


@pytest.mark.parametrize(
    "params",
    [
        {"from": "2024-3-1"},
        {"to": "2024-02-30"},
        {"from": "2024-04-01", "to": "2024-03-01"},
        {"currency": "dollars"},
        {"from": "9999-12-01", "to": "9999-12-31"},
    ],
)
def test_invalid_parameters(client: TestClient, test_gym, params):
    response = _revenue(client, test_gym, **params)
    assert response.status_code == 400
    assert "error" in response.json()


def test_unknown_gym(client: TestClient):
    response = client.get(f"/gyms/{uuid.uuid4()}/stats/revenue", params={"from": "2024-03-01", "to": "2024-03-31"})
    assert response.status_code == 404
    assert response.json() == {"error": "Gym not found"}
