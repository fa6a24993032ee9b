"""
Tests for the curve and shape HTTP endpoints.

These tests drive the FastAPI application through ``TestClient``:
creating curves for both shape kinds, reading them back, exporting,
taking playback frames, simplifying and the shape helpers.  Domain
errors must surface as 400 responses and unknown ids as 404.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from cyclogon.main import app  # type: ignore


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _create(client: TestClient, body: dict) -> dict:
    response = client.post("/api/curves", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_cycloid_with_default_trace_point(client: TestClient) -> None:
    data = _create(client, {"shape": {"kind": "circle", "radius": 1.0}, "cycles": 1})
    assert data["type"] == "cycloid"
    assert data["pointCount"] == 190
    assert len(data["points"]) == 190
    assert data["downsampled"] is False
    first = data["points"][0]
    assert first["x"] == pytest.approx(0.0, abs=1e-12)
    assert first["y"] == pytest.approx(2.0)
    assert first["theta"] == 0.0
    assert first["center"] == {"x": 0.0, "y": 1.0}
    assert data["tracePoint"]["y"] == pytest.approx(1.0)
    assert data["metadata"]["totalDistance"] == pytest.approx(2.0 * math.pi)
    assert data["boundingBox"]["maxY"] == pytest.approx(2.0)
    assert data["arcLength"] == pytest.approx(8.0, rel=1e-3)
    assert data["shape"]["kind"] == "circle"


def test_create_cyclogon(client: TestClient) -> None:
    body = {
        "shape": {"kind": "polygon", "sides": 4, "radius": 1.0},
        "tracePoint": {"x": 0.0, "y": 0.5},
        "cycles": 1.125,
        "resolution": {"pointsPerSide": 10},
    }
    data = _create(client, body)
    assert data["type"] == "cyclogon"
    assert data["pointCount"] == 1 + 4 * 10 + 5
    last = data["points"][-1]
    assert last["sideIndex"] == 4
    assert last["rotation"] == pytest.approx(4.5 * math.pi / 2)
    assert last["pivot"]["y"] == 0.0
    assert data["metadata"]["sides"] == 4
    assert data["metadata"]["adjustmentRotation"] == pytest.approx(0.0, abs=1e-12)


def test_large_curves_are_downsampled(client: TestClient) -> None:
    body = {
        "shape": {"kind": "circle", "radius": 1.0},
        "cycles": 5,
        "resolution": {"pointsPerRadian": 300},
    }
    data = _create(client, body)
    assert data["pointCount"] > 5000
    assert data["downsampled"] is True
    assert len(data["points"]) <= 5001
    stored = client.get(f"/api/curves/{data['curveId']}").json()
    assert stored["pointCount"] == data["pointCount"]


@pytest.mark.parametrize(
    "body",
    [
        {"shape": {"kind": "circle", "radius": 0}, "cycles": 1},
        {"shape": {"kind": "circle", "radius": -2}, "cycles": 1},
        {"shape": {"kind": "polygon", "sides": 2, "radius": 1}, "cycles": 1},
        {"shape": {"kind": "polygon", "sides": 25, "radius": 1}, "cycles": 1},
    ],
)
def test_invalid_requests_are_bad_requests(client: TestClient, body: dict) -> None:
    response = client.post("/api/curves", json=body)
    assert response.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        {"shape": {"kind": "circle", "radius": 1}, "cycles": 0},
        {"shape": {"kind": "circle", "radius": 1}, "cycles": -1.5},
        {"shape": {"kind": "circle", "radius": 1}, "cycles": 6},
        {"shape": {"kind": "circle", "radius": 1}, "cycles": 1e307},
        {"shape": {"kind": "polygon", "sides": 3, "radius": 1}, "cycles": 1e6},
        {"shape": {"kind": "circle", "radius": 1}, "cycles": 1, "resolution": {"pointsPerSide": 0}},
        {"shape": {"kind": "polygon", "sides": 3, "radius": 1}, "resolution": {"pointsPerSide": 5000}},
        {"shape": {"kind": "circle", "radius": 1}, "resolution": {"pointsPerRadian": 0}},
        {"shape": {"kind": "circle", "radius": 1}, "resolution": {"pointsPerRadian": 1e308}},
    ],
)
def test_out_of_range_cycles_and_resolution_are_unprocessable(client: TestClient, body: dict) -> None:
    response = client.post("/api/curves", json=body)
    assert response.status_code == 422


def test_curve_over_sample_limit_is_bad_request(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CYCLOGON_POINTS_PER_RADIAN", "1e6")
    response = client.post("/api/curves", json={"shape": {"kind": "circle", "radius": 1}, "cycles": 5})
    assert response.status_code == 400
    assert "limit" in response.json()["detail"]


def test_unknown_shape_kind_is_unprocessable(client: TestClient) -> None:
    response = client.post("/api/curves", json={"shape": {"kind": "ellipse", "radius": 1}})
    assert response.status_code == 422


def test_unknown_curve(client: TestClient) -> None:
    assert client.get("/api/curves/nope").status_code == 404
    assert client.get("/api/curves/nope/export").status_code == 404
    assert client.get("/api/curves/nope/frame").status_code == 404
    assert client.post("/api/curves/nope/simplify", json={"tolerance": 0.1}).status_code == 404


def test_get_curve_round_trip(client: TestClient) -> None:
    created = _create(client, {"shape": {"kind": "polygon", "sides": 5, "radius": 2.0}, "cycles": 1})
    fetched = client.get(f"/api/curves/{created['curveId']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_export_formats(client: TestClient) -> None:
    curve_id = _create(client, {"shape": {"kind": "polygon", "sides": 3, "radius": 1.0}})["curveId"]
    csv_response = client.get(f"/api/curves/{curve_id}/export", params={"format": "csv", "precision": 2})
    assert csv_response.status_code == 200
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert csv_response.text.splitlines()[0] == "X,Y"
    assert "cyclogon_cyclogon3sides_1cycles.csv" in csv_response.headers["content-disposition"]
    json_response = client.get(f"/api/curves/{curve_id}/export", params={"format": "json"})
    assert json_response.headers["content-type"].startswith("application/json")
    assert json_response.json()["type"] == "cyclogon"
    svg_response = client.get(f"/api/curves/{curve_id}/export", params={"format": "svg"})
    assert svg_response.headers["content-type"].startswith("image/svg+xml")
    assert "<svg" in svg_response.text
    assert client.get(f"/api/curves/{curve_id}/export", params={"format": "png"}).status_code == 400


def test_frame(client: TestClient) -> None:
    curve_id = _create(client, {"shape": {"kind": "polygon", "sides": 4, "radius": 1.0}})["curveId"]
    response = client.get(f"/api/curves/{curve_id}/frame", params={"progress": 0.5})
    assert response.status_code == 200
    frame = response.json()
    assert len(frame["vertices"]) == 4
    pivot = frame["pivot"]
    assert min(math.hypot(v["x"] - pivot["x"], v["y"] - pivot["y"]) for v in frame["vertices"]) == pytest.approx(
        0.0, abs=1e-9
    )


def test_simplify(client: TestClient) -> None:
    created = _create(client, {"shape": {"kind": "circle", "radius": 1.0}, "cycles": 2})
    response = client.post(f"/api/curves/{created['curveId']}/simplify", json={"tolerance": 0.05})
    assert response.status_code == 200
    data = response.json()
    assert data["originalPointCount"] == created["pointCount"]
    assert 2 <= data["pointCount"] < created["pointCount"]
    assert data["points"][0]["x"] == pytest.approx(created["points"][0]["x"])
    assert data["points"][-1]["x"] == pytest.approx(created["points"][-1]["x"])


def test_inspect_shapes(client: TestClient) -> None:
    response = client.post("/api/shapes/inspect", json={"shape": {"kind": "polygon", "sides": 6, "radius": 1.0}})
    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "polygon"
    assert data["properties"]["sideLength"] == pytest.approx(1.0)
    assert len(data["properties"]["vertices"]) == 6
    assert data["top"]["y"] == pytest.approx(data["properties"]["apothem"])
    circle = client.post("/api/shapes/inspect", json={"shape": {"kind": "circle", "radius": 2.0}}).json()
    assert circle["properties"]["circumference"] == pytest.approx(4.0 * math.pi)
    assert circle["top"]["y"] == pytest.approx(2.0)
    bad = client.post("/api/shapes/inspect", json={"shape": {"kind": "circle", "radius": 0}})
    assert bad.status_code == 400


def test_snap(client: TestClient) -> None:
    body = {"shape": {"kind": "polygon", "sides": 4, "radius": 1.0}, "point": {"x": 0.0, "y": -3.0}}
    data = client.post("/api/shapes/snap", json=body).json()
    assert data["state"] == "edge"
    assert data["edgeIndex"] == 3
    assert data["t"] == pytest.approx(0.5)
    assert data["y"] == pytest.approx(-math.sqrt(2.0) / 2.0)
    body = {"shape": {"kind": "circle", "radius": 1.0}, "point": {"x": 0.0, "y": 5.0}}
    data = client.post("/api/shapes/snap", json=body).json()
    assert data["state"] == "angle"
    assert data["angle"] == pytest.approx(math.pi / 2)
    assert data["y"] == pytest.approx(1.0)
