"""Shared type definitions for dzview core module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class ImageDescriptor:
    """Parsed DeepZoom image descriptor.

    Attributes:
        tile_size: Edge length of a square tile at native resolution
        overlap: Pixel overlap between adjacent tiles (not used in layout)
        format: Tile image file extension (e.g. "jpg")
        width: Full-resolution image width in pixels
        height: Full-resolution image height in pixels
    """

    tile_size: int
    overlap: int
    format: str
    width: int
    height: int


class TileAddress(NamedTuple):
    """Address of one tile in the displayed grid.

    Attributes:
        row: Row index (0-based)
        col: Column index (0-based)
        level: Resolution level used in the tile path
        url: Tile image URL
    """

    row: int
    col: int
    level: int
    url: str
