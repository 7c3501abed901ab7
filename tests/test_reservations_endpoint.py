from fastapi.testclient import TestClient

MEMBER = {"X-User-Id": "user-1", "X-User-Role": "member"}
OTHER_MEMBER = {"X-User-Id": "user-2"}
EMPLOYEE = {"X-User-Id": "staff-1", "X-User-Role": "EMPLOYEE"}


def _create(client: TestClient, payload: dict, headers: dict = MEMBER):
    return client.post("/api/v1/reservations", json=payload, headers=headers)


def test_create_reservation_success(client: TestClient, reservation_payload):
    res = _create(client, reservation_payload)

    assert res.status_code == 201
    body = res.json()
    assert body["id"] == "RES-0001"
    assert body["status"] == "PENDING"
    assert body["user_id"] == "user-1"
    assert body["total_price"] == "70.00"
    assert body["payment"]["amount"] == "70.00"
    assert body["payment"]["status"] == "PENDING"
    assert body["payment"]["currency"] == "EUR"
    assert body["price"]["days"] == 2
    assert body["price"]["breakdown"][0]["description"] == "Base price (2 days × €35.00)"


def test_create_reservation_requires_identity(client: TestClient, reservation_payload):
    res = client.post("/api/v1/reservations", json=reservation_payload)

    assert res.status_code == 401
    assert res.json()["error"] == "UNAUTHORIZED"


def test_unknown_role_is_rejected(client: TestClient, reservation_payload):
    res = _create(client, reservation_payload, headers={"X-User-Id": "user-1", "X-User-Role": "ROOT"})

    assert res.status_code == 401


def test_create_reservation_conflict_body(client: TestClient, reservation_payload):
    assert _create(client, reservation_payload).status_code == 201

    res = _create(client, {**reservation_payload, "start_date": "2030-01-12", "end_date": "2030-01-15"}, OTHER_MEMBER)

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "CONFLICT"
    assert body["details"] == {
        "vehicle_id": "vehicle-1",
        "conflicting_reservations": [{"id": "RES-0001", "start_date": "2030-01-10", "end_date": "2030-01-12"}],
    }


def test_create_reservation_missing_field(client: TestClient, reservation_payload):
    payload = dict(reservation_payload)
    del payload["pickup_location"]

    res = _create(client, payload)

    assert res.status_code == 400
    assert res.json()["error"] == "INVALID_INPUT"
    assert res.json()["details"] == {"field": "pickup_location"}


def test_create_reservation_malformed_body(client: TestClient, reservation_payload):
    res = _create(client, {**reservation_payload, "start_date": "10/01/2030", "color": "red"})

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "INVALID_INPUT"
    locations = [error["loc"][-1] for error in body["details"]["errors"]]
    assert "start_date" in locations
    assert "color" in locations


def test_create_reservation_unavailable_and_unknown_vehicle(client: TestClient, reservation_payload):
    disabled = _create(client, {**reservation_payload, "vehicle_id": "vehicle-off"})
    assert disabled.status_code == 400
    assert disabled.json()["error"] == "VEHICLE_UNAVAILABLE"

    missing = _create(client, {**reservation_payload, "vehicle_id": "vehicle-404"})
    assert missing.status_code == 404
    assert missing.json()["error"] == "NOT_FOUND"


def test_create_reservation_idempotent_replay(client: TestClient, reservation_payload):
    headers = {**MEMBER, "Idempotency-Key": "k1"}

    first = _create(client, reservation_payload, headers)
    replay = _create(client, reservation_payload, headers)

    assert first.status_code == 201
    assert replay.status_code == 201
    assert replay.json()["id"] == first.json()["id"]
    assert replay.json()["payment"]["id"] == first.json()["payment"]["id"]

    conflict = _create(client, {**reservation_payload, "vehicle_id": "vehicle-2"}, headers)
    assert conflict.status_code == 409
    assert conflict.json()["error"] == "IDEMPOTENCY_CONFLICT"


def test_list_and_get_reservations(client: TestClient, reservation_payload):
    _create(client, reservation_payload)
    _create(client, {**reservation_payload, "vehicle_id": "vehicle-2"}, OTHER_MEMBER)

    own = client.get("/api/v1/reservations", headers=MEMBER)
    assert own.status_code == 200
    assert [r["user_id"] for r in own.json()] == ["user-1"]

    everything = client.get("/api/v1/reservations", headers=EMPLOYEE)
    assert len(everything.json()) == 2

    detail = client.get("/api/v1/reservations/RES-0001", headers=MEMBER)
    assert detail.status_code == 200
    assert detail.json()["payment"]["id"] == "PAY-0001"

    denied = client.get("/api/v1/reservations/RES-0001", headers=OTHER_MEMBER)
    assert denied.status_code == 403
    assert denied.json()["error"] == "ACCESS_DENIED"

    missing = client.get("/api/v1/reservations/RES-404", headers=MEMBER)
    assert missing.status_code == 404


def test_edit_reservation(client: TestClient, reservation_payload):
    _create(client, reservation_payload)

    res = client.put("/api/v1/reservations/RES-0001", json={"end_date": "2030-01-13"}, headers=MEMBER)

    assert res.status_code == 200
    assert res.json()["total_price"] == "105.00"
    assert res.json()["payment"]["amount"] == "105.00"

    forbidden = client.put("/api/v1/reservations/RES-0001", json={"status": "CONFIRMED"}, headers=MEMBER)
    assert forbidden.status_code == 401

    confirmed = client.put("/api/v1/reservations/RES-0001", json={"status": "CONFIRMED"}, headers=EMPLOYEE)
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "CONFIRMED"


def test_cancel_reservation(client: TestClient, reservation_payload):
    _create(client, reservation_payload)

    res = client.delete("/api/v1/reservations/RES-0001", headers=MEMBER)
    assert res.status_code == 200
    assert res.json()["status"] == "CANCELLED"
    assert res.json()["payment"]["status"] == "REFUNDED"

    again = client.delete("/api/v1/reservations/RES-0001", headers=MEMBER)
    assert again.status_code == 400
    assert again.json()["error"] == "INVALID_STATE"


def test_availability_endpoints(client: TestClient, reservation_payload):
    _create(client, reservation_payload)

    booked = client.get("/api/v1/reservations/availability", params={"start_date": "2030-01-12", "end_date": "2030-01-20"})
    assert booked.status_code == 200
    assert booked.json()["booked_vehicle_ids"] == ["vehicle-1"]

    overlapping = client.get(
        "/api/v1/vehicles/vehicle-1/reservations/overlapping",
        params={"start_date": "2030-01-08", "end_date": "2030-01-10"},
    )
    assert overlapping.status_code == 200
    assert [r["id"] for r in overlapping.json()["reservations"]] == ["RES-0001"]

    invalid = client.get("/api/v1/reservations/availability", params={"start_date": "2030-01-12", "end_date": "2030-01-12"})
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "INVALID_INPUT"


def test_search_vehicles(client: TestClient, reservation_payload):
    _create(client, reservation_payload)

    res = client.get(
        "/api/v1/vehicles",
        params={"start_date": "2030-01-10", "end_date": "2030-01-11", "location": "Berlin Central"},
    )

    assert res.status_code == 200
    flags = {v["id"]: v["booked"] for v in res.json()}
    assert flags["vehicle-1"] is True
    assert flags["vehicle-6"] is False
    assert "vehicle-2" not in flags


def test_tariffs_and_quote(client: TestClient):
    tariffs = client.get("/api/v1/tariffs")
    assert tariffs.status_code == 200
    assert [t["id"] for t in tariffs.json()] == ["BASIC", "DISCOUNTED", "EXCLUSIVE"]

    quote = client.get(
        "/api/v1/pricing/quote",
        params={"vehicle_id": "vehicle-1", "start_date": "2030-01-10", "end_date": "2030-01-12", "tariff": "EXCLUSIVE"},
    )
    assert quote.status_code == 200
    body = quote.json()
    assert body["total_price"] == "87.50"
    assert body["tariff_adjustment"] == "-17.50"
    assert body["price_per_day"] == "35.00"

    missing_rate = client.get("/api/v1/pricing/quote", params={"start_date": "2030-01-10", "end_date": "2030-01-12"})
    assert missing_rate.status_code == 400
