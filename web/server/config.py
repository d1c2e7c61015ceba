from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ServerConfig:
    descriptor_url: str
    host: str = "0.0.0.0"
    port: int = 8000


def load_config() -> ServerConfig:
    descriptor_url = os.getenv("DZVIEW_WEB_DESCRIPTOR_URL", "").strip()
    if not descriptor_url:
        raise RuntimeError("DZVIEW_WEB_DESCRIPTOR_URL must be set to a .dzi URL")
    host = os.getenv("DZVIEW_WEB_HOST", "0.0.0.0")
    port_str = os.getenv("DZVIEW_WEB_PORT", "8000")
    try:
        port = int(port_str)
    except ValueError:
        port = 8000
    return ServerConfig(descriptor_url=descriptor_url, host=host, port=port)
