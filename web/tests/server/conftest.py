from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dzview.core.session import FetchFailed, FetchSucceeded
from web.server.config import ServerConfig
from web.server.main import create_app

DESCRIPTOR_URL = "http://host/a/b/image.dzi"

DESCRIPTOR_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<Image xmlns="http://schemas.microsoft.com/deepzoom/2008" '
    'TileSize="256" Overlap="1" Format="jpg">'
    '<Size Width="4096" Height="2048"/></Image>'
)


@pytest.fixture()
def fetched_urls() -> list[str]:
    return []


@pytest.fixture()
def app(fetched_urls):
    def fetcher(url: str) -> FetchSucceeded:
        fetched_urls.append(url)
        return FetchSucceeded(text=DESCRIPTOR_XML)

    return create_app(ServerConfig(descriptor_url=DESCRIPTOR_URL), fetcher=fetcher)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def failed_client() -> TestClient:
    app = create_app(
        ServerConfig(descriptor_url=DESCRIPTOR_URL),
        fetcher=lambda url: FetchFailed(reason="connection refused"),
    )
    return TestClient(app)


@pytest.fixture()
def malformed_client() -> TestClient:
    app = create_app(
        ServerConfig(descriptor_url=DESCRIPTOR_URL),
        fetcher=lambda url: FetchSucceeded(text="<html>not found</html>"),
    )
    return TestClient(app)
