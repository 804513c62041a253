"""
End-to-end tests for the HTTP layer. Same flow the web client drives:
quote, book, accept, start, complete, then read earnings, notifications,
receipts and ratings.
"""

import pytest

BOOKING = {
    "pickup_address": "Connaught Place",
    "drop_address": "Hauz Khas",
    "distance_km": 5.0,
    "passenger_id": 1,
    "simulated_peak": False,
    "simulated_traffic": 2.0,
}


def _book(client, **overrides):
    response = client.post("/api/rides", json={**BOOKING, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_predict_returns_quote_without_booking(client):
    response = client.post("/api/rides/predict", json=BOOKING)
    assert response.status_code == 200
    quote = response.json()
    assert quote["city"] == "delhi"
    assert quote["route_calculated"] is True
    assert quote["final_fare"] == round(
        (quote["base_fare"] + quote["distance_km"] * quote["rate_per_km"]) * quote["surge_multiplier"], 2
    )
    assert client.get("/api/rides", params={"user_id": 1}).json() == []


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"pickup_address": ""}, "pickup_address"),
        ({"simulated_traffic": 15}, "simulated_traffic"),
        ({"distance_km": -2}, "distance_km"),
        ({"scheduled_at": "2020-01-01T00:00:00Z"}, "scheduled_at"),
    ],
)
def test_invalid_booking_is_400_with_field(client, overrides, field):
    response = client.post("/api/rides", json={**BOOKING, **overrides})
    assert response.status_code == 400
    body = response.json()
    assert body["field"] == field
    assert body["kind"] == "validation"
    assert body["message"]


def test_missing_body_field_is_400(client):
    payload = {k: v for k, v in BOOKING.items() if k != "passenger_id"}
    response = client.post("/api/rides", json=payload)
    assert response.status_code == 400
    assert response.json()["field"] == "passenger_id"


def test_book_and_read_back(client):
    ride = _book(client)
    assert ride["status"] == "pending"
    assert ride["driver_id"] is None
    assert client.get(f"/api/rides/{ride['id']}").json() == ride
    assert [r["id"] for r in client.get("/api/rides", params={"user_id": 1}).json()] == [ride["id"]]


def test_unknown_ride_is_404(client):
    response = client.get("/api/rides/999")
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_accept_conflicts_and_permissions(client):
    ride = _book(client)
    accepted = client.post(f"/api/rides/{ride['id']}/accept", json={"driver_id": 7})
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"
    assert accepted.json()["driver_id"] == 7

    second = client.post(f"/api/rides/{ride['id']}/accept", json={"driver_id": 8})
    assert second.status_code == 409

    wrong_driver = client.patch(f"/api/rides/{ride['id']}/status", json={"driver_id": 8, "status": "in_progress"})
    assert wrong_driver.status_code == 403

    wrong_passenger = client.post(f"/api/rides/{ride['id']}/cancel", json={"passenger_id": 2})
    assert wrong_passenger.status_code == 403

    unknown_status = client.patch(f"/api/rides/{ride['id']}/status", json={"driver_id": 7, "status": "flying"})
    assert unknown_status.status_code == 400


def test_complete_ride_credits_driver_and_notifies_passenger(client):
    ride = _book(client)
    client.post(f"/api/rides/{ride['id']}/accept", json={"driver_id": 7})
    client.patch(f"/api/rides/{ride['id']}/status", json={"driver_id": 7, "status": "in_progress"})
    done = client.patch(f"/api/rides/{ride['id']}/status", json={"driver_id": 7, "status": "completed"})
    assert done.status_code == 200
    assert done.json()["status"] == "completed"

    earnings = client.get("/api/driver/earnings/7").json()
    assert earnings["summary"]["total_rides"] == 1
    assert earnings["summary"]["total_gross"] == ride["final_fare"]
    assert earnings["earnings"][0]["ride_id"] == ride["id"]
    assert len(earnings["daily_breakdown"]) == 1

    notifications = client.get("/api/notifications/1").json()
    assert notifications[0]["title"] == "Ride complete"
    assert notifications[-1]["type"] == "driver_arrival"
    assert client.get("/api/notifications/1/unread").json() == {"count": 3}

    read = client.patch(f"/api/notifications/{notifications[0]['id']}/read")
    assert read.status_code == 200
    assert read.json()["read"] is True
    assert client.get("/api/notifications/1/unread").json() == {"count": 2}


def test_mark_unknown_notification_is_404(client):
    assert client.patch("/api/notifications/42/read").status_code == 404


def test_cancel_pending_ride(client):
    ride = _book(client)
    response = client.post(f"/api/rides/{ride['id']}/cancel", json={"passenger_id": 1})
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    again = client.post(f"/api/rides/{ride['id']}/cancel", json={"passenger_id": 1})
    assert again.status_code == 409


def test_scheduled_rides(client):
    later = _book(client, scheduled_at="2026-03-03T09:00:00Z")
    _book(client)
    scheduled = client.get("/api/rides/scheduled", params={"user_id": 1}).json()
    assert [r["id"] for r in scheduled] == [later["id"]]


def test_track_and_gps(client):
    ride = _book(client)
    client.post(f"/api/rides/{ride['id']}/accept", json={"driver_id": 7})
    client.patch(f"/api/rides/{ride['id']}/status", json={"driver_id": 7, "status": "in_progress"})
    now = "2026-03-02T10:10:00Z"

    track = client.get(f"/api/rides/{ride['id']}/track", params={"now": now})
    assert track.status_code == 200
    body = track.json()
    assert body["status"] == "in_progress"
    assert 0.2 <= body["progress"] <= 1.0
    assert set(body["driver_location"]) == {"lat", "lng"}
    assert body["pickup_location"] == {"lat": 28.6315, "lng": 77.2167}

    gps = client.get(f"/api/rides/{ride['id']}/gps", params={"now": now}).json()
    assert gps["coordinates"]
    assert gps["distance_covered"] + gps["remaining_km"] == pytest.approx(ride["distance_km"], abs=0.02)


def test_cities_and_zones(client):
    cities = client.get("/api/cities").json()
    assert len(cities) == 7
    assert cities[0]["key"] == "delhi"

    mumbai = client.get("/api/cities/mumbai").json()
    assert mumbai["base_fare"] == 35
    assert len(mumbai["zones"]) == 7
    assert client.get("/api/cities/atlantis").json()["key"] == "delhi"

    zones = client.get("/api/zones", params={"city": "pune"}).json()
    assert len(zones) == 7
    assert all(0 <= z["demand_score"] <= 10 for z in zones)
    assert len(client.get("/api/zones").json()) == 49


def test_admin_stats(client):
    first = _book(client)
    _book(client, passenger_id=2)
    client.post(f"/api/rides/{first['id']}/accept", json={"driver_id": 7})

    stats = client.get("/api/admin/stats", params={"city": "delhi"}).json()
    assert stats["total_rides"] == 2
    assert stats["active_drivers"] == 1
    assert stats["revenue"] == pytest.approx(first["final_fare"] * 2, abs=0.01)
    assert len(stats["zone_stats"]) == 7


def _complete(client, ride_id, driver_id=7):
    client.post(f"/api/rides/{ride_id}/accept", json={"driver_id": driver_id})
    client.patch(f"/api/rides/{ride_id}/status", json={"driver_id": driver_id, "status": "in_progress"})
    client.patch(f"/api/rides/{ride_id}/status", json={"driver_id": driver_id, "status": "completed"})


@pytest.mark.parametrize("distance", [1e308, 5000.5])
def test_absurd_distance_is_400_and_not_stored(client, distance):
    response = client.post("/api/rides", json={**BOOKING, "distance_km": distance})
    assert response.status_code == 400
    assert response.json()["field"] == "distance_km"
    assert client.get("/api/rides", params={"user_id": 1}).json() == []


def test_receipt_after_completion(client):
    ride = _book(client)
    early = client.get(f"/api/rides/{ride['id']}/receipt")
    assert early.status_code == 409

    _complete(client, ride["id"])
    receipt = client.get(f"/api/rides/{ride['id']}/receipt").json()
    breakdown = receipt["breakdown"]
    assert receipt["ride_id"] == ride["id"]
    assert receipt["driver_id"] == 7
    assert breakdown["subtotal"] == ride["final_fare"]
    assert breakdown["total"] == round(breakdown["subtotal"] + breakdown["gst"] + breakdown["platform_fee"], 2)
    assert client.get("/api/rides/999/receipt").status_code == 404


def test_rating_flow(client):
    ride = _book(client)
    rating = {"ride_id": ride["id"], "passenger_id": 1, "stars": 5, "comment": "Great driver"}
    assert client.post("/api/ratings", json=rating).status_code == 409

    _complete(client, ride["id"])
    assert client.post("/api/ratings", json={**rating, "passenger_id": 2}).status_code == 403
    bad = client.post("/api/ratings", json={**rating, "stars": 6})
    assert bad.status_code == 400
    assert bad.json()["field"] == "stars"

    created = client.post("/api/ratings", json=rating)
    assert created.status_code == 201
    assert created.json()["driver_id"] == 7
    assert client.post("/api/ratings", json=rating).status_code == 409

    assert [r["stars"] for r in client.get(f"/api/ratings/ride/{ride['id']}").json()] == [5]
    summary = client.get("/api/ratings/driver/7").json()
    assert summary["total_ratings"] == 1
    assert summary["average_stars"] == 5.0
    assert client.get("/api/ratings/driver/8").json()["total_ratings"] == 0


def test_error_bodies_documented(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorSchema" in schema["components"]["schemas"]
    responses = schema["paths"]["/api/rides/{ride_id}/accept"]["post"]["responses"]
    assert {"400", "403", "404", "409"} <= set(responses)
