"""HTTP contract of /api/plants."""

import pytest


@pytest.fixture()
def conditions(lettuce_profile):
    return lettuce_profile.ideal_conditions()


def _create(client, conditions, owner="alice", plant="lettuce", stage="vegetative"):
    return client.post(
        "/api/plants",
        json={"owner_id": owner, "plant_name": plant, "stage": stage, "ideal_conditions": conditions},
    )


def test_list_presets(client):
    resp = client.get("/api/plants/presets")
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["count"] == 9


def test_list_presets_by_stage(client):
    data = client.get("/api/plants/presets?stage=seedling").get_json()["data"]
    assert data["count"] == 3
    assert {p["stage"] for p in data["presets"]} == {"seedling"}


def test_preset_lookup(client):
    data = client.get("/api/plants/presets?plant=Lettuce&stage=vegetative").get_json()["data"]
    assert data["ideal_conditions"]["ppm_max"] == 840

    missing = client.get("/api/plants/presets?plant=cactus&stage=vegetative").get_json()["data"]
    assert missing["ideal_conditions"] is None


def test_create_and_list_owned_profile(client, conditions):
    resp = _create(client, dict(conditions, ph_min=6.0))
    assert resp.status_code == 201
    created = resp.get_json()["data"]
    assert created["owner_id"] == "alice"
    assert created["ideal_conditions"]["ph_min"] == 6.0

    listed = client.get("/api/plants?owner_id=alice").get_json()["data"]
    assert listed["count"] == 1
    assert client.get("/api/plants?owner_id=bob").get_json()["data"]["count"] == 0


def test_create_replaces_same_plant_and_stage(client, conditions):
    first = _create(client, conditions).get_json()["data"]
    second = _create(client, dict(conditions, ppm_max=900)).get_json()["data"]
    assert first["profile_id"] == second["profile_id"]
    assert client.get("/api/plants?owner_id=alice").get_json()["data"]["count"] == 1


def test_owned_profile_drives_decisions(client, conditions):
    _create(client, dict(conditions, ph_min=4.0))
    client.post(
        "/api/sensordata/selection",
        json={"device_id": "box-1", "plant_name": "lettuce", "stage": "vegetative", "owner_id": "alice"},
    )
    data = client.post("/api/sensordata", json={"device_id": "box-1", "ph": 5.0}).get_json()["data"]
    assert data["sensor_status"]["ph"] == "IDEAL"
    assert data["device_command"]["ph_up_pump"] is False


@pytest.mark.parametrize(
    "payload",
    [
        {"plant_name": "lettuce", "stage": "vegetative", "ideal_conditions": {}},
        {"owner_id": "alice", "plant_name": "lettuce", "stage": "vegetative"},
        {"owner_id": " ", "plant_name": "lettuce", "stage": "vegetative", "ideal_conditions": {}},
    ],
)
def test_create_rejects_malformed_body(client, payload):
    resp = client.post("/api/plants", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["ok"] is False


def test_create_rejects_inverted_range(client, conditions):
    resp = _create(client, dict(conditions, temp_min=30))
    assert resp.status_code == 400
    assert "min must be <= max" in resp.get_json()["error"]["message"]


def test_list_requires_owner(client):
    assert client.get("/api/plants").status_code == 400


def test_delete_profile(client, conditions):
    profile_id = _create(client, conditions).get_json()["data"]["profile_id"]

    assert client.delete(f"/api/plants/{profile_id}?owner_id=bob").status_code == 404
    assert client.delete(f"/api/plants/{profile_id}").status_code == 400

    resp = client.delete(f"/api/plants/{profile_id}?owner_id=alice")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["profile_id"] == profile_id
    assert client.get("/api/plants?owner_id=alice").get_json()["data"]["count"] == 0


def test_unknown_api_route_returns_json(client):
    resp = client.get("/api/plants/presets/extra")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False
