"""Test fixtures for dzview tests."""

from __future__ import annotations

import pytest

from dzview.core.types import ImageDescriptor

SAMPLE_URL = "http://host/a/b/image.dzi"

SAMPLE_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<Image xmlns="http://schemas.microsoft.com/deepzoom/2008" '
    'TileSize="256" Overlap="1" Format="jpg">'
    '<Size Width="4096" Height="2048"/>'
)


@pytest.fixture
def sample_xml() -> str:
    """Well-formed descriptor for a 4096x2048 image with 256px tiles."""
    return SAMPLE_XML


@pytest.fixture
def sample_url() -> str:
    return SAMPLE_URL


@pytest.fixture
def descriptor() -> ImageDescriptor:
    """The descriptor that SAMPLE_XML parses to."""
    return ImageDescriptor(tile_size=256, overlap=1, format="jpg", width=4096, height=2048)
