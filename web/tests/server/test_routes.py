from __future__ import annotations

import pytest

from web.server.config import load_config

DESCRIPTOR_URL = "http://host/a/b/image.dzi"


def test_descriptor_fetched_once(client, fetched_urls):
    client.get("/api/session")
    client.post("/api/zoom/in")
    client.get("/api/tiles")
    assert fetched_urls == [DESCRIPTOR_URL]


def test_get_session(client):
    response = client.get("/api/session")
    assert response.status_code == 200
    data = response.json()
    assert data["url"] == DESCRIPTOR_URL
    assert data["zoomLevel"] == 0
    assert data["status"] == "loaded"
    assert data["fetchError"] is None
    assert data["parseError"] is None


def test_get_descriptor(client):
    response = client.get("/api/descriptor")
    assert response.status_code == 200
    assert response.json() == [
        {"key": "TileSize", "value": "256"},
        {"key": "Overlap", "value": "1"},
        {"key": "Format", "value": "jpg"},
        {"key": "Width", "value": "4096"},
        {"key": "Height", "value": "2048"},
    ]


def test_tiles_at_zoom_zero(client):
    response = client.get("/api/tiles")
    assert response.status_code == 200
    assert response.json() == [
        {"row": 0, "col": 0, "level": 8, "url": "http://host/a/b/image_files/8/0_0.jpg"}
    ]


def test_zoom_in_grows_grid(client):
    for _ in range(3):
        response = client.post("/api/zoom/in")
    assert response.json()["zoomLevel"] == 3

    tiles = client.get("/api/tiles").json()
    assert len(tiles) == 16
    assert tiles[0]["url"] == "http://host/a/b/image_files/11/0_0.jpg"
    assert (tiles[-1]["row"], tiles[-1]["col"]) == (3, 3)


def test_zoom_out_clamps_at_zero(client):
    response = client.post("/api/zoom/out")
    assert response.status_code == 200
    assert response.json()["zoomLevel"] == 0


def test_fetch_failure(failed_client):
    data = failed_client.get("/api/session").json()
    assert data["status"] == "fetch_failed"
    assert data["fetchError"] == "connection refused"
    assert failed_client.get("/api/tiles").json() == []
    assert failed_client.get("/api/descriptor").status_code == 404


def test_parse_failure_reports_position(malformed_client):
    data = malformed_client.get("/api/session").json()
    assert data["status"] == "parse_failed"
    assert data["parseError"]["offset"] == 0
    assert data["parseError"]["line"] == 1
    assert data["parseError"]["column"] == 1
    assert malformed_client.get("/api/tiles").json() == []


def test_zoom_without_descriptor(malformed_client):
    response = malformed_client.post("/api/zoom/in")
    assert response.json()["zoomLevel"] == 1
    assert malformed_client.get("/api/tiles").json() == []


def test_load_config_requires_url(monkeypatch):
    monkeypatch.delenv("DZVIEW_WEB_DESCRIPTOR_URL", raising=False)
    with pytest.raises(RuntimeError):
        load_config()


def test_load_config_invalid_port(monkeypatch):
    monkeypatch.setenv("DZVIEW_WEB_DESCRIPTOR_URL", DESCRIPTOR_URL)
    monkeypatch.setenv("DZVIEW_WEB_PORT", "not-a-port")
    config = load_config()
    assert config.descriptor_url == DESCRIPTOR_URL
    assert config.port == 8000
