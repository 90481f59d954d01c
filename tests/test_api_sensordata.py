"""HTTP contract of /api/sensordata."""


def _select(client, device_id="box-1", plant="lettuce", stage="vegetative", **extra):
    return client.post(
        "/api/sensordata/selection",
        json={"device_id": device_id, "plant_name": plant, "stage": stage, **extra},
    )


def test_select_plant(client):
    resp = _select(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["data"]["plant_name"] == "lettuce"
    assert body["data"]["stage"] == "vegetative"


def test_select_plant_from_header_and_bad_stage(client):
    resp = client.post(
        "/api/sensordata/selection",
        json={"plant_name": "Basil", "stage": "flowering"},
        headers={"X-Device-Id": "box-9"},
    )
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["device_id"] == "box-9"
    assert data["stage"] == "seedling"


def test_select_plant_requires_plant_name(client):
    resp = client.post("/api/sensordata/selection", json={"device_id": "box-1"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["ok"] is False
    assert body["error"]["details"]["errors"]


def test_post_without_device_id(client):
    resp = client.post("/api/sensordata", json={"ph": 6.0})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["message"] == "device_id is required"


def test_post_without_selection_returns_safe_defaults(client):
    resp = client.post("/api/sensordata", json={"device_id": "box-1", "ph": 4.0, "ppm": 100})
    assert resp.status_code == 200
    body = resp.get_json()
    data = body["data"]
    assert data["stored"] is False
    assert data["device_command"] == {
        "light": 0,
        "light_motor_cmd": "STOP",
        "ph_up_pump": False,
        "ph_down_pump": False,
        "ppm_a_pump": False,
        "ppm_b_pump": False,
        "lockout_ms": 120_000,
    }
    assert "No plant selected" in body["message"]


def test_post_doses_once_then_locks(client):
    _select(client)

    first = client.post("/api/sensordata", json={"device_id": "box-1", "ph": 5.0, "ppm": 500})
    data = first.get_json()["data"]
    assert first.status_code == 200
    assert data["stored"] is True
    assert data["device_command"]["ph_up_pump"] is True
    assert data["device_command"]["ppm_a_pump"] is False
    assert data["dosing"]["reserved_ms"] == 120_000
    assert data["sensor_status"]["ph"] == "NOT_IDEAL"
    assert data["ideal_conditions"]["ph_min"] == 5.8
    assert 0 <= data["device_command"]["light"] <= 255

    second = client.post("/api/sensordata", json={"device_id": "box-1", "ph": 5.0, "ppm": 500})
    data = second.get_json()["data"]
    assert data["device_command"]["ph_up_pump"] is False
    assert data["dosing"]["outcome"] == "busy"
    assert data["dosing"]["busy_until_ms"] == first.get_json()["data"]["dosing"]["busy_until_ms"]


def test_post_coerces_bad_readings(client):
    _select(client)
    resp = client.post(
        "/api/sensordata",
        json={"device_id": "box-1", "ph": "broken", "ppm": "700", "temperature": None},
    )
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["sensor_data"]["ph"] is None
    assert data["sensor_data"]["ppm"] == 700.0
    assert data["sensor_status"]["ph"] == "UNKNOWN"
    assert data["device_command"]["ph_up_pump"] is False


def test_post_rejects_oversized_device_id(client):
    resp = client.post("/api/sensordata", json={"device_id": "x" * 500, "ph": 6.0})
    assert resp.status_code == 400
    assert resp.get_json()["error"]["details"][0]["field"] == "device_id"


def test_get_status(client):
    _select(client)
    client.post("/api/sensordata", json={"device_id": "box-1", "ph": 6.0, "ppm": 900, "water_sufficient": False})

    resp = client.get("/api/sensordata?device_id=box-1")
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["sensor_status"]["ppm"] == "DILUTE_WATER"
    assert data["sensor_status"]["water_level"] == "NOT_IDEAL"
    assert data["commands"]["light"] == 0
    assert data["dosing_busy_until_ms"] is None


def test_get_status_requires_device(client):
    assert client.get("/api/sensordata").status_code == 400
