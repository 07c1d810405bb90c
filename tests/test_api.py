"""
API tests: routers wired to the real services over in-memory SQLite.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.api.routers.checkout import get_lock_service
from app.main import app
from app.repos.cart_repo import CartRepo
from app.services.checkout_service import CART_NOT_CLOSED

USER = {"user_id": "user-1"}
ITEM = {"side": "SINGLE", "start_date": "2024-01-01", "end_date": "2024-01-04"}


@pytest.fixture
def client(db, lock_service):
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _add(client, billboard_id, user=USER, **overrides):
    return client.post("/cart/items", params=user, json={"billboard_id": billboard_id, **ITEM, **overrides})


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_session_endpoint_is_idempotent(client):
    first = client.post("/cart/session", params=USER).json()
    second = client.post("/cart/session", params=USER).json()

    assert first == second


def test_missing_cart_is_404_and_count_is_zero(client):
    assert client.get("/cart", params=USER).status_code == 404
    assert client.get("/cart/count", params=USER).json() == {"count": 0}


def test_add_item_returns_refreshed_cart(client, single_billboard):
    response = _add(client, single_billboard)

    assert response.status_code == 200
    body = response.json()
    assert body["total_items"] == 1
    assert body["items"][0]["total_days"] == 3
    assert float(body["items"][0]["total_amount"]) == 3000.0
    assert body["items"][0]["billboard_title"] == "MG Road Unipole"
    assert client.get("/cart/count", params=USER).json() == {"count": 1}


def test_duplicate_item_is_409(client, single_billboard):
    _add(client, single_billboard)

    response = _add(client, single_billboard)

    assert response.status_code == 409


def test_unknown_billboard_is_422(client):
    assert _add(client, 9999).status_code == 422


def test_reversed_dates_are_rejected(client, single_billboard):
    response = _add(client, single_billboard, start_date="2024-01-04", end_date="2024-01-01")

    assert response.status_code == 422


def test_update_and_remove_item(client, single_billboard):
    item_id = _add(client, single_billboard).json()["items"][0]["id"]

    patched = client.patch(f"/cart/items/{item_id}", params=USER, json={"end_date": "2024-01-11"})
    assert patched.status_code == 204
    assert client.get("/cart", params=USER).json()["items"][0]["total_days"] == 10

    assert client.delete(f"/cart/items/{item_id}", params=USER).status_code == 204
    assert client.get("/cart/count", params=USER).json() == {"count": 0}


def test_other_users_item_is_403(client, single_billboard):
    item_id = _add(client, single_billboard).json()["items"][0]["id"]
    intruder = {"user_id": "intruder"}

    assert client.delete(f"/cart/items/{item_id}", params=intruder).status_code == 403
    assert client.patch(f"/cart/items/{item_id}", params=intruder, json={"ad_content": "x"}).status_code == 403


def test_update_missing_item_is_404(client):
    assert client.patch("/cart/items/12345", params=USER, json={"ad_type": "digital"}).status_code == 404


def test_validate_and_checkout(client, single_billboard):
    assert client.post("/cart/validate", params=USER).json() == {"valid": False, "invalid_items": []}

    _add(client, single_billboard)
    assert client.post("/cart/validate", params=USER).json()["valid"] is True

    result = client.post("/checkout", params=USER).json()

    assert result["success"] is True
    assert len(result["booking_ids"]) == 1
    assert result["errors"] == []
    assert client.get("/cart", params=USER).status_code == 404


def test_checkout_of_empty_cart(client):
    result = client.post("/checkout", params=USER).json()

    assert result["success"] is False
    assert result["errors"] == ["Cart is empty"]


def test_second_user_sees_slot_taken(client, single_billboard):
    _add(client, single_billboard)
    client.post("/checkout", params=USER)

    other = {"user_id": "user-2"}
    _add(client, single_billboard, user=other)
    result = client.post("/checkout", params=other).json()

    assert result["success"] is False
    assert len(result["invalid_items"]) == 1


def test_availability_endpoint(client, two_sided_billboard):
    _add(client, two_sided_billboard, side="A")
    client.post("/checkout", params=USER)

    response = client.get(
        f"/billboards/{two_sided_billboard}/availability",
        params={"start_date": "2024-01-02", "end_date": "2024-01-03"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["side_a_available"] is False
    assert body["side_b_available"] is True
    assert {d["side"]: d["available"] for d in body["availability_details"]} == {
        "A": False,
        "B": True,
        "BOTH": False,
    }


def test_availability_rejects_reversed_range(client, single_billboard):
    response = client.get(
        f"/billboards/{single_billboard}/availability",
        params={"start_date": "2024-01-04", "end_date": "2024-01-01"},
    )

    assert response.status_code == 400


def test_add_item_reports_success_when_reload_fails(client, single_billboard):
    session_id = client.post("/cart/session", params=USER).json()["session_id"]
    error = OperationalError("SELECT cart_sessions", {}, Exception("connection reset"))

    with patch.object(CartRepo, "get_active_session_with_items", side_effect=error):
        response = _add(client, single_billboard)

    assert response.status_code == 200
    assert response.json() == {"session_id": session_id}
    assert client.get("/cart/count", params=USER).json() == {"count": 1}
    assert _add(client, single_billboard).status_code == 409


def test_checkout_reports_bookings_when_cart_cannot_be_closed(client, single_billboard):
    _add(client, single_billboard)
    error = OperationalError("UPDATE cart_sessions", {}, Exception("connection reset"))

    with patch.object(CartRepo, "deactivate_session", side_effect=error):
        result = client.post("/checkout", params=USER).json()

    assert result["success"] is True
    assert len(result["booking_ids"]) == 1
    assert result["errors"] == [CART_NOT_CLOSED]
