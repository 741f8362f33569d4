from datetime import date, timedelta


def _register(client, email, role="user"):
    resp = client.post("/users", json={
        "email": email,
        "password": "hunter22",
        "first_name": "Pat",
        "last_name": "Lee",
        "role": role,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def _venue_payload(owner_id, **kw):
    payload = {
        "name": "Neon Lounge",
        "description": "Cocktails and DJs",
        "category": "nightlife",
        "address": "1 Strip Blvd",
        "price_range_min": "30.00",
        "price_range_max": "90.00",
        "owner_id": owner_id,
    }
    payload.update(kw)
    return payload


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_user_registration_hides_password(client):
    body = _register(client, "pat@example.com")
    assert body["email"] == "pat@example.com"
    assert "password" not in body
    assert "password_hash" not in body


def test_duplicate_registration_is_409(client):
    _register(client, "pat@example.com")
    resp = client.post("/users", json={
        "email": "pat@example.com", "password": "hunter22", "first_name": "P", "last_name": "L",
    })
    assert resp.status_code == 409
    assert resp.json() == {"detail": "Email is already registered"}


def test_bad_login_is_401(client):
    _register(client, "pat@example.com")
    assert client.post("/users/login", json={"email": "pat@example.com", "password": "hunter22"}).status_code == 200
    resp = client.post("/users/login", json={"email": "pat@example.com", "password": "nope"})
    assert resp.status_code == 401


def test_only_venue_owners_create_venues(client):
    guest = _register(client, "guest@example.com")
    owner = _register(client, "owner@example.com", role="venue_owner")

    resp = client.post("/venues", json=_venue_payload(guest["id"]))
    assert resp.status_code == 403

    resp = client.post("/venues", json=_venue_payload(owner["id"]))
    assert resp.status_code == 201
    body = resp.json()
    assert body["price_range_min"] == 30.0
    assert body["rating"] == 0.0
    assert body["review_count"] == 0


def test_venue_payload_validation_is_422(client):
    owner = _register(client, "owner@example.com", role="venue_owner")
    resp = client.post("/venues", json=_venue_payload(owner["id"], price_range_min="100.00"))
    assert resp.status_code == 422
    resp = client.post("/venues", json=_venue_payload(owner["id"], category="casino"))
    assert resp.status_code == 422


def test_missing_venue_returns_null(client):
    resp = client.get("/venues/999")
    assert resp.status_code == 200
    assert resp.json() is None


def test_search_and_review_flow(client):
    owner = _register(client, "owner@example.com", role="venue_owner")
    guest = _register(client, "guest@example.com")
    venue = client.post("/venues", json=_venue_payload(owner["id"])).json()

    resp = client.post(f"/venues/{venue['id']}/reviews", json={"user_id": guest["id"], "rating": 5, "content": "Loved it"})
    assert resp.status_code == 201
    resp = client.post(f"/venues/{venue['id']}/reviews", json={"user_id": guest["id"], "rating": 1, "content": "Again"})
    assert resp.status_code == 409
    resp = client.post(f"/venues/{venue['id']}/reviews", json={"user_id": guest["id"], "rating": 6, "content": "x"})
    assert resp.status_code == 422

    found = client.get("/venues", params={"keyword": "cocktail", "sort_by": "rating"}).json()
    assert [v["id"] for v in found] == [venue["id"]]
    assert found[0]["rating"] == 5.0
    assert found[0]["review_count"] == 1

    assert client.get("/venues", params={"sort_by": "nearest"}).status_code == 422
    assert len(client.get(f"/venues/{venue['id']}/reviews").json()) == 1


def test_booking_lifecycle(client):
    owner = _register(client, "owner@example.com", role="venue_owner")
    guest = _register(client, "guest@example.com")
    stranger = _register(client, "stranger@example.com")
    venue = client.post("/venues", json=_venue_payload(owner["id"])).json()

    resp = client.post("/bookings", json={
        "user_id": guest["id"],
        "venue_id": venue["id"],
        "booking_date": (date.today() + timedelta(days=3)).isoformat(),
        "start_time": "21:00",
        "guest_count": 3,
    })
    assert resp.status_code == 201
    booking = resp.json()
    assert booking["total_amount"] == 90.0
    assert booking["status"] == "pending"
    assert booking["payment_status"] == "pending"

    resp = client.post(f"/bookings/{booking['id']}/cancel", json={"user_id": stranger["id"]})
    assert resp.status_code == 200
    assert resp.json() is None

    resp = client.post(f"/bookings/{booking['id']}/cancel", json={"user_id": guest["id"]})
    assert resp.json()["status"] == "cancelled"
    assert resp.json()["payment_status"] == "refunded"

    bookings = client.get(f"/users/{guest['id']}/bookings").json()
    assert [b["id"] for b in bookings] == [booking["id"]]

    notes = client.get(f"/users/{guest['id']}/notifications").json()
    assert len(notes) == 2
    assert {n["type"] for n in notes} == {"booking_update"}
    assert client.post(f"/users/{guest['id']}/notifications/{notes[0]['id']}/read").json() is True
    assert client.post(f"/users/{stranger['id']}/notifications/{notes[1]['id']}/read").json() is False


def test_booking_unknown_venue_is_404(client):
    guest = _register(client, "guest@example.com")
    resp = client.post("/bookings", json={
        "user_id": guest["id"],
        "venue_id": 12345,
        "booking_date": date.today().isoformat(),
        "start_time": "19:00",
        "guest_count": 2,
    })
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Venue not found"}


def test_group_flow(client):
    alice = _register(client, "alice@example.com")
    bob = _register(client, "bob@example.com")
    carol = _register(client, "carol@example.com")

    resp = client.post("/groups", json={"organizer_id": alice["id"], "name": "Hen do", "total_budget": "1500.00"})
    assert resp.status_code == 201
    group = resp.json()
    assert group["member_count"] == 1
    assert group["total_budget"] == 1500.0

    assert client.post(f"/groups/{group['id']}/members", json={"user_id": bob["id"]}).status_code == 201
    assert client.post(f"/groups/{group['id']}/members", json={"user_id": bob["id"]}).status_code == 409
    assert client.post("/groups/999/members", json={"user_id": bob["id"]}).status_code == 404

    groups = client.get(f"/users/{bob['id']}/groups").json()
    assert [g["member_count"] for g in groups] == [2]

    resp = client.post(f"/groups/{group['id']}/messages", json={"user_id": carol["id"], "message": "hi"})
    assert resp.status_code == 403
    resp = client.post(f"/groups/{group['id']}/messages", json={"user_id": bob["id"], "message": "hi"})
    assert resp.status_code == 201
    assert [m["message"] for m in client.get(f"/groups/{group['id']}/messages").json()] == ["hi"]

    resp = client.post(f"/groups/{group['id']}/expenses", json={
        "payer_id": alice["id"], "description": "Limo", "amount": "250.00", "category": "transport",
    })
    assert resp.status_code == 201
    assert resp.json()["amount"] == 250.0
    assert len(client.get(f"/groups/{group['id']}/expenses").json()) == 1


def test_favorites_endpoints(client):
    owner = _register(client, "owner@example.com", role="venue_owner")
    guest = _register(client, "guest@example.com")
    venue = client.post("/venues", json=_venue_payload(owner["id"])).json()

    assert client.post(f"/users/{guest['id']}/favorites", json={"venue_id": venue["id"]}).status_code == 201
    assert client.post(f"/users/{guest['id']}/favorites", json={"venue_id": 999}).status_code == 404
    assert [v["id"] for v in client.get(f"/users/{guest['id']}/favorites").json()] == [venue["id"]]
    assert client.delete(f"/users/{guest['id']}/favorites/{venue['id']}").json() is True
    assert client.delete(f"/users/{guest['id']}/favorites/{venue['id']}").json() is False
