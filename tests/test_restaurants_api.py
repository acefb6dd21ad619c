import uuid
from datetime import datetime

from app.db.session import get_db
from app.main import app
from app.models.models import Restaurant
from app.services.restaurants import service

API = "/api/v1/restaurants"

ADDRESS = {
    "street": "Rua Augusta",
    "number": "100",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01304-000",
}


def _create(client, **overrides):
    payload = {"name": "Pizza do João", "delivery_fee": 599, "min_order_value": 2000, "address": ADDRESS}
    payload.update(overrides)
    response = client.post(API, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": "test"}


def test_create_and_fetch_by_slug(client):
    created = _create(client)
    assert created["slug"] == "pizza-do-joao"
    assert created["status"] == "DRAFT"
    assert created["is_open"] is False
    assert created["address"]["state"] == "SP"

    response = client.get(f"{API}/pizza-do-joao")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


def test_create_validation_and_conflict(client):
    response = client.post(API, json={"name": ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "name is required"

    response = client.post(API, json={"name": "A", "delivery_fee": -10})
    assert response.status_code == 400

    _create(client)
    response = client.post(API, json={"name": "Pizza do Joao"})
    assert response.status_code == 409
    assert response.json()["detail"] == "slug already exists"


def test_unknown_slug_is_404(client):
    assert client.get(f"{API}/missing").status_code == 404
    assert client.get(f"{API}/missing/opening-hours").status_code == 404


def test_list_restaurants(client):
    _create(client, name="One")
    _create(client, name="Two")

    response = client.get(API, params={"limit": 1})
    assert response.status_code == 200
    assert len(response.json()) == 1
    assert len(client.get(API).json()) == 2


def test_update_hours_rejects_overlap_and_range(client):
    restaurant_id = _create(client)["id"]

    response = client.put(f"{API}/{restaurant_id}/hours", json={"hours": [
        {"weekday": 1, "opens_at": 480, "closes_at": 1200},
        {"weekday": 1, "opens_at": 1199, "closes_at": 1260},
    ]})
    assert response.status_code == 400
    assert response.json()["detail"] == "opening hours overlap on weekday 1"

    response = client.put(f"{API}/{restaurant_id}/hours", json={"hours": [
        {"weekday": 1, "opens_at": 480, "closes_at": 1440},
    ]})
    assert response.status_code == 400
    assert "closes_at" in response.json()["detail"]


def test_open_flow_and_weekly_schedule(client):
    restaurant_id = _create(client)["id"]

    response = client.patch(f"{API}/{restaurant_id}/open")
    assert response.status_code == 400
    assert response.json()["detail"] == "restaurant must have opening hours to be opened"

    response = client.put(f"{API}/{restaurant_id}/hours", json={"hours": [
        {"weekday": 5, "opens_at": 1320, "closes_at": 120},
    ]})
    assert response.status_code == 200
    assert response.json() == {"message": "opening hours updated successfully"}

    response = client.put(f"{API}/{restaurant_id}/payments", json={"methods": ["PIX"]})
    assert response.status_code == 200

    response = client.patch(f"{API}/{restaurant_id}/open")
    assert response.status_code == 200
    assert response.json() == {"message": "restaurant opened successfully"}
    assert client.get(f"{API}/pizza-do-joao").json()["status"] == "OPEN"

    schedule = client.get(f"{API}/pizza-do-joao/opening-hours").json()
    assert schedule["weekly_hours"]["friday"] == [
        {"opens_at": "22:00", "closes_at": "02:00", "crosses_midnight": True}
    ]
    assert schedule["weekly_hours"]["saturday"] == []

    response = client.patch(f"{API}/{restaurant_id}/close")
    assert response.status_code == 200
    assert client.get(f"{API}/pizza-do-joao").json()["is_open"] is False


def test_invalid_payment_method(client):
    restaurant_id = _create(client)["id"]
    response = client.put(f"{API}/{restaurant_id}/payments", json={"methods": ["BITCOIN"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "invalid payment method: BITCOIN"


def test_unknown_or_malformed_id(client):
    missing = uuid.uuid4()
    assert client.patch(f"{API}/{missing}/open").status_code == 404
    assert client.patch(f"{API}/{missing}/close").status_code == 404
    assert client.put(f"{API}/{missing}/hours", json={"hours": []}).status_code == 404
    assert client.patch(f"{API}/not-a-uuid/open").status_code == 422


def test_oversized_integers_are_rejected(client):
    assert client.get(API, params={"limit": 2**70}).status_code == 422
    assert client.get(API, params={"offset": 2**70}).status_code == 422

    assert client.post(API, json={"name": "Big", "delivery_fee": 2**70}).status_code == 422
    assert client.post(API, json={"name": "Big", "min_order_value": 2**63}).status_code == 422
    assert client.post(API, json={"name": "Big", "preparation_time_min": 2**31}).status_code == 422
    assert client.get(API).json() == []


def test_opening_hours_status_matches_current_time(client, monkeypatch):
    # friday 23:00, inside 22:00-02:00
    monkeypatch.setattr(service, "local_now", lambda: datetime(2026, 10, 23, 23, 0))
    restaurant_id = _create(client)["id"]
    client.put(f"{API}/{restaurant_id}/hours", json={"hours": [
        {"weekday": 5, "opens_at": 1320, "closes_at": 120},
    ]})
    client.put(f"{API}/{restaurant_id}/payments", json={"methods": ["PIX"]})
    assert client.patch(f"{API}/{restaurant_id}/open").status_code == 200

    schedule = client.get(f"{API}/pizza-do-joao/opening-hours").json()
    assert schedule["is_open"] is True
    assert schedule["current_time"] == "2026-10-23 23:00"

    client.patch(f"{API}/{restaurant_id}/close")
    assert client.get(f"{API}/pizza-do-joao/opening-hours").json()["is_open"] is False


def test_client_uses_test_session(client, db):
    assert get_db in app.dependency_overrides
    created = _create(client, name="Shared Session")

    # rows written through the api are visible to the test database session
    assert db.get(Restaurant, uuid.UUID(created["id"])).slug == "shared-session"
