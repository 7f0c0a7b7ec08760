from datetime import timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient

from resort_api.api.errors import install_error_handlers
from resort_api.db import models

from factories import (
    auth_headers,
    create_hall,
    create_menu_item,
    create_room,
    create_slot,
    create_ticket,
    create_user,
    tomorrow,
)


def booking_body(persons=2, **overrides):
    body = {
        "customer_name": "Ana Lopez",
        "email": "ana@example.com",
        "phone": "555-0101",
        "date": tomorrow().isoformat(),
        "time_slot": "06:00-09:00",
        "pass_type": "daily",
        "persons": persons,
    }
    body.update(overrides)
    return body


def test_login_and_me(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        create_user(session, "frontdesk", models.UserRole.hotel_staff)

    response = client.post(
        "/api/v1/auth/login", data={"username": "FrontDesk", "password": "secret123"}
    )

    assert response.status_code == 200
    token = response.json()["access_token"]
    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["role"] == "hotel_staff"
    with SessionLocal() as session:
        user = session.query(models.User).filter_by(username="frontdesk").one()
        assert user.last_login_at is not None


def test_login_with_wrong_password_is_rejected(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        create_user(session, "frontdesk", models.UserRole.hotel_staff)

    response = client.post("/api/v1/auth/login", data={"username": "frontdesk", "password": "nope"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid credentials"}


def test_missing_token_returns_401_envelope(api_client):
    client, _ = api_client

    response = client.get("/api/v1/pool/bookings")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_disabled_user_token_is_rejected(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        user = create_user(session, "former", models.UserRole.pool_staff, is_active=False)
        headers = auth_headers(user)

    response = client.get("/api/v1/pool/bookings", headers=headers)

    assert response.status_code == 401


def test_staff_cannot_reach_other_modules(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        headers = auth_headers(create_user(session, "lifeguard", models.UserRole.pool_staff))

    response = client.get("/api/v1/hotel/reservations", headers=headers)

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_conference_dashboard_is_admin_only(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        staff = auth_headers(create_user(session, "events", models.UserRole.conference_staff))
        admin = auth_headers(create_user(session, "boss"))

    assert client.get("/api/v1/conference/dashboard", headers=staff).status_code == 403
    assert client.get("/api/v1/conference/dashboard", headers=admin).status_code == 200


def test_pool_booking_flow(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        create_slot(session, capacity=5)
        create_ticket(session)
        headers = auth_headers(create_user(session, "lifeguard", models.UserRole.pool_staff))

    created = client.post("/api/v1/pool/bookings", json=booking_body(persons=4), headers=headers)

    assert created.status_code == 201
    payload = created.json()
    assert payload["success"] is True
    assert payload["data"]["booking_number"].startswith("PB-")
    assert payload["data"]["amount"] == 100.0

    rejected = client.post("/api/v1/pool/bookings", json=booking_body(persons=2), headers=headers)
    assert rejected.status_code == 400
    assert rejected.json() == {"success": False, "message": "Only 1 spots available in this slot"}

    listing = client.get("/api/v1/pool/bookings", params={"limit": 5}, headers=headers)
    body = listing.json()
    assert body["total"] == 1
    assert body["page"] == 1
    assert body["total_pages"] == 1
    assert len(body["data"]) == 1


def test_invalid_body_returns_400_envelope(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        headers = auth_headers(create_user(session, "lifeguard", models.UserRole.pool_staff))

    response = client.post("/api/v1/pool/bookings", json=booking_body(persons=0), headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "persons" in body["message"]


def test_missing_booking_returns_404(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        headers = auth_headers(create_user(session, "boss"))

    response = client.get("/api/v1/pool/bookings/999", headers=headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Booking not found"


def test_duplicate_user_rejected(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        headers = auth_headers(create_user(session, "boss"))
    body = {
        "name": "Chef",
        "username": "chef",
        "email": "chef@resort.test",
        "password": "kitchen1",
        "role": "restaurant_staff",
    }

    assert client.post("/api/v1/users", json=body, headers=headers).status_code == 201
    duplicate = client.post("/api/v1/users", json=body, headers=headers)

    assert duplicate.status_code == 400


def test_health(api_client):
    client, _ = api_client

    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_unhandled_error_reports_stack_outside_production():
    app = FastAPI()
    install_error_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "kaboom"
    assert "RuntimeError" in body["stack"]


def test_logout_acknowledges_authenticated_user(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        headers = auth_headers(create_user(session, "frontdesk", models.UserRole.hotel_staff))

    response = client.post("/api/v1/auth/logout", headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"
    assert client.post("/api/v1/auth/logout").status_code == 401


def test_user_get_change_password_and_delete(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        admin = create_user(session, "boss")
        headers = auth_headers(admin)
        chef = create_user(session, "chef", models.UserRole.restaurant_staff)
        admin_id, chef_id = admin.id, chef.id

    fetched = client.get(f"/api/v1/users/{chef_id}", headers=headers)
    assert fetched.json()["data"]["username"] == "chef"

    changed = client.patch(
        f"/api/v1/users/{chef_id}/change-password", json={"password": "newsecret"}, headers=headers
    )
    assert changed.json() == {"success": True, "message": "Password changed successfully", "data": None}
    login = client.post("/api/v1/auth/login", data={"username": "chef", "password": "newsecret"})
    assert login.status_code == 200

    own = client.delete(f"/api/v1/users/{admin_id}", headers=headers)
    assert own.status_code == 400
    assert own.json()["message"] == "You cannot delete your own account"

    assert client.delete(f"/api/v1/users/{chef_id}", headers=headers).status_code == 200
    missing = client.get(f"/api/v1/users/{chef_id}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"


def test_conference_status_endpoint(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        create_hall(session)
        headers = auth_headers(create_user(session, "planner", models.UserRole.conference_staff))
    day = (tomorrow() + timedelta(days=7)).isoformat()
    body = {
        "event_name": "Board Meeting",
        "client_name": "Grace Planner",
        "email": "grace@corp.test",
        "phone": "555-0202",
        "hall_type": "hall_a",
        "start_date": day,
        "end_date": day,
        "start_time": "09:00",
        "end_time": "12:00",
        "event_type": "meeting",
        "attendees": 20,
        "amount": 400,
    }

    created = client.post("/api/v1/conference/bookings", json=body, headers=headers)
    assert created.status_code == 201
    booking_id = created.json()["data"]["id"]

    jump = client.patch(
        f"/api/v1/conference/bookings/{booking_id}/status",
        json={"booking_status": "completed"},
        headers=headers,
    )
    assert jump.status_code == 400
    assert jump.json() == {
        "success": False,
        "message": "Cannot change booking status from pending to completed",
    }

    approved = client.patch(
        f"/api/v1/conference/bookings/{booking_id}/status",
        json={"booking_status": "approved"},
        headers=headers,
    )
    assert approved.status_code == 200
    data = approved.json()["data"]
    assert data["booking_status"] == "approved"
    assert data["invoice_number"].startswith("INV-CH-")

    clash = client.post("/api/v1/conference/bookings", json=body, headers=headers)
    assert clash.status_code == 400
    assert clash.json()["success"] is False


def test_hotel_check_out_blocked_until_paid(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        create_room(session)
        headers = auth_headers(create_user(session, "frontdesk", models.UserRole.hotel_staff))
    check_in = tomorrow()
    body = {
        "guest_name": "Linus Guest",
        "phone": "555-0303",
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=2)).isoformat(),
        "room_number": "101",
        "adults": 2,
    }

    created = client.post("/api/v1/hotel/reservations", json=body, headers=headers)
    assert created.status_code == 201
    reservation_id = created.json()["data"]["id"]
    base = f"/api/v1/hotel/reservations/{reservation_id}"

    assert client.post(f"{base}/check-in", headers=headers).status_code == 200
    blocked = client.post(f"{base}/check-out", headers=headers)
    assert blocked.status_code == 400
    assert blocked.json() == {
        "success": False,
        "message": 'Cannot check out with pending payment. Please update payment status to "paid" first.',
    }

    client.patch(f"{base}/payment", json={"payment_status": "paid"}, headers=headers)
    checked_out = client.post(f"{base}/check-out", headers=headers)
    assert checked_out.status_code == 200
    assert checked_out.json()["data"]["reservation_status"] == "checked_out"


def test_hotel_services_initialize_and_list(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        headers = auth_headers(create_user(session, "boss"))

    initialized = client.post("/api/v1/hotel/services/initialize", headers=headers)
    assert initialized.json()["data"] == {"created": 13}

    services = client.get("/api/v1/hotel/services", headers=headers).json()["data"]
    assert len(services) == 13
    assert {"name", "price", "category", "is_available"} <= set(services[0])


def test_restaurant_sale_and_stock_rejection(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        item_id = create_menu_item(session, stock=2).id
        headers = auth_headers(create_user(session, "waiter", models.UserRole.restaurant_staff))

    sold = client.post(
        "/api/v1/restaurant/sales",
        json={"items": [{"menu_item_id": item_id, "quantity": 1}]},
        headers=headers,
    )
    assert sold.status_code == 201
    assert sold.json()["data"]["items"][0]["category"] == "soft_drink"

    rejected = client.post(
        "/api/v1/restaurant/sales",
        json={"items": [{"menu_item_id": item_id, "quantity": 5}]},
        headers=headers,
    )
    assert rejected.status_code == 400
    assert rejected.json() == {"success": False, "message": "Only 1 left in stock for Lemonade"}


def test_restaurant_categories_initialized_by_admin_only(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        admin_headers = auth_headers(create_user(session, "boss"))
        staff_headers = auth_headers(create_user(session, "waiter", models.UserRole.restaurant_staff))

    assert client.post("/api/v1/restaurant/categories/initialize", headers=staff_headers).status_code == 403
    created = client.post("/api/v1/restaurant/categories/initialize", headers=admin_headers)
    assert created.json()["data"] == {"created": 13}

    listed = client.get("/api/v1/restaurant/categories", headers=staff_headers).json()["data"]
    assert listed[0]["name"] == "cold_drink"
    assert listed[0]["item_count"] == 0
