"""HTTP API."""

import pytest
from fastapi.testclient import TestClient

from rackcad.web import server


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(server, "OUTPUTS_DIR", tmp_path / "web")
    return TestClient(server.app)


def test_standards(client):
    r = client.get("/api/standards")
    assert r.status_code == 200
    data = r.json()
    assert data["racks"]["19in"]["panel_width_mm"] == 482.6
    assert "honeycomb" in data["vent_styles"]
    assert data["hole_patterns"] == ["all", "outer", "center"]


def test_validate(client, small_design):
    r = client.post("/api/validate", json={"design": small_design})
    assert r.status_code == 200
    body = r.json()
    assert body["valid"] is True
    assert body["errors"] == []
    assert body["design"]["panel"]["thickness"] == 4.0

    r = client.post("/api/validate", json={"design": {"rack": "23in"}})
    assert r.json()["valid"] is False


def test_malformed_design(client):
    r = client.post("/api/validate", json={"design": {"cages": [{"device": {"name": "x"}}]}})
    assert r.status_code == 400


@pytest.mark.parametrize("design", [
    {"cutouts": [1]},
    {"cutouts": {"shape": "rect"}},
    {"panel": None, "keystones": ["left"]},
    {"panel": [4]},
    {"cages": [{"device": {"width": 50, "height": 20, "depth": 50}, "cable_opening": [5]}]},
    {"cages": [{"device": None}]},
    {"ears": {"device_holes": [[15]]}},
    {"units": "two"},
])
def test_wrongly_shaped_design(client, design):
    r = client.post("/api/validate", json={"design": design})
    assert r.status_code == 400


def test_null_sections_use_defaults(client):
    design = {"panel": None, "vents": [{"x": 0, "y": 0, "width": 60, "height": 30, "vent": None}]}
    r = client.post("/api/validate", json={"design": design})
    assert r.status_code == 200
    body = r.json()
    assert body["valid"] is True
    assert body["design"]["vents"][0]["vent"]["style"] == "honeycomb"


def test_scad_part(client, small_design):
    small_design["bed_width"] = 500
    r = client.post("/api/scad/faceplate", json={"design": small_design})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "difference() {" in r.text

    assert client.post("/api/scad/ear_left", json={"design": small_design}).status_code == 404
    bad = {**small_design, "units": 0}
    assert client.post("/api/scad/faceplate", json={"design": bad}).status_code == 400


def test_build_and_fetch(client, small_design):
    r = client.post("/api/build", json={"design": small_design})
    assert r.status_code == 200
    body = r.json()
    names = [p["name"] for p in body["parts"]]
    assert "joiner" in names

    r = client.get(f"/api/outputs/{body['run_id']}/joiner.scad")
    assert r.status_code == 200
    assert "splice plate" in r.text
    assert client.get(f"/api/outputs/{body['run_id']}/nothing.scad").status_code == 404


def test_build_invalid(client):
    r = client.post("/api/build", json={"design": {"units": 0}})
    assert r.status_code == 400
    assert "units" in r.json()["detail"]


def test_outputs_stay_inside_run(client, small_design, tmp_path):
    (tmp_path / "secret.txt").write_text("outside-run", encoding="utf-8")
    web = tmp_path / "web"
    web.mkdir()
    (web / "index.txt").write_text("outputs-root", encoding="utf-8")

    assert client.get("/api/outputs/%2E%2E/secret.txt").status_code == 404
    assert client.get("/api/outputs/%2E/index.txt").status_code == 404

    run_id = client.post("/api/build", json={"design": small_design}).json()["run_id"]
    assert client.get(f"/api/outputs/{run_id}/manifest.json").status_code == 200
    assert client.get(f"/api/outputs/{run_id}/%2E%2E/index.txt").status_code == 404
    assert client.get(f"/api/outputs/{run_id}/%2E%2E/%2E%2E/secret.txt").status_code == 404
