import pytest

from temporal_cache.core.observability.metrics import snapshot_named

MIDNIGHT = 1609459200

ENABLED = {"harmonization": {"enabled": True, "slots": "00:00,06:00,12:00,18:00", "tolerance": 3600}}


def test_harmonize_endpoint(client, use_settings):
    use_settings(ENABLED)
    r = client.post("/api/v1/harmonization/harmonize", json={"timestamp": 1609461000})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["harmonized"] == 1609459200
    assert body["shift_seconds"] == -1800
    assert body["within_tolerance"] is True
    assert snapshot_named().get("harmonize_ok") == 1


def test_harmonize_disabled_returns_conflict(client, use_settings):
    use_settings({})
    r = client.post("/api/v1/harmonization/harmonize", json={"timestamp": 1609461000})
    assert r.status_code == 409
    assert "disabled" in r.json()["detail"]


def test_impact_endpoint(client, use_settings):
    use_settings(ENABLED)
    r = client.post(
        "/api/v1/harmonization/impact",
        json={"timestamps": [MIDNIGHT + 600, MIDNIGHT + 1200, MIDNIGHT + 1800]},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["original"] == 3
    assert body["harmonized"] == 1
    assert body["reduction"] > 60.0


def test_impact_endpoint_empty_batch(client, use_settings):
    use_settings(ENABLED)
    r = client.post("/api/v1/harmonization/impact", json={"timestamps": []})
    body = r.json()
    assert (body["original"], body["harmonized"], body["reduction"]) == (0, 0, 0.0)


def test_impact_disabled_returns_conflict(client, use_settings):
    use_settings({})
    r = client.post("/api/v1/harmonization/impact", json={"timestamps": [MIDNIGHT]})
    assert r.status_code == 409


def test_preview_endpoint(client, use_settings):
    use_settings(ENABLED)
    r = client.post(
        "/api/v1/harmonization/preview",
        json={
            "records": [
                {"uid": 1, "visible_from": MIDNIGHT + 600},
                {"uid": 2, "visible_from": MIDNIGHT + 6 * 3600},
                {"uid": 3, "table_name": "tt_content", "visible_until": MIDNIGHT + 12 * 3600 + 900},
            ]
        },
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert len(body["results"]) == 3
    assert body["message"] == "2 of 3 records would change"
    assert body["results"][0]["harmonized_from"] == MIDNIGHT


def test_preview_rejects_empty_content(client, use_settings):
    use_settings(ENABLED)
    r = client.post("/api/v1/harmonization/preview", json={"records": []})
    body = r.json()
    assert body["success"] is False
    assert "no_content" in body["message"]


def test_preview_disabled_returns_conflict(client, use_settings):
    use_settings({})
    r = client.post("/api/v1/harmonization/preview", json={"records": [{"uid": 1}]})
    assert r.status_code == 409
    assert "disabled" in r.json()["detail"]


@pytest.mark.parametrize("path", ["/api/v1/harmonization/harmonize", "/api/v1/harmonization/impact"])
def test_invalid_tolerance_returns_unprocessable(client, use_settings, path):
    use_settings({"harmonization": {"enabled": True, "tolerance": -5}})
    payload = {"timestamp": MIDNIGHT} if path.endswith("harmonize") else {"timestamps": [MIDNIGHT]}
    r = client.post(path, json=payload)
    assert r.status_code == 422
    assert "tolerance" in r.json()["detail"]
