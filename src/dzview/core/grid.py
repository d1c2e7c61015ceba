"""Tile grid layout for a DeepZoom descriptor at a given zoom level."""

from __future__ import annotations

import logging
import math

from dzview.core.types import ImageDescriptor, TileAddress

logger = logging.getLogger(__name__)


def min_level(tile_size: int) -> int:
    """Resolution level at which one tile covers ``tile_size`` pixels.

    ``log2(tile_size)`` rounded to the nearest integer, halves away from
    zero (256 -> 8, 300 -> 8).
    """
    return math.floor(math.log2(tile_size) + 0.5)


def grid_extent(descriptor: ImageDescriptor, zoom_level: int) -> tuple[int, int]:
    """Highest row and column index displayed at ``zoom_level``.

    The extent is capped by the zoom level and by the number of whole tiles
    that fit the full-resolution image. This is not the per-level pyramid
    size of DeepZoom; existing viewers depend on this exact layout.

    Returns:
        Tuple of (rows, cols); indices run over ``0..rows`` and ``0..cols``
        inclusive.
    """
    rows = min(zoom_level, descriptor.height // descriptor.tile_size)
    cols = min(zoom_level, descriptor.width // descriptor.tile_size)
    return rows, cols


def tile_url(base_url: str, level: int, col: int, row: int, fmt: str) -> str:
    """Build the URL of one tile from the descriptor URL.

    The text after the last ``.`` of ``base_url`` is dropped and
    ``_files/<level>/<col>_<row>.<fmt>`` appended. A base URL without any
    ``.`` leaves an empty prefix.
    """
    prefix = ".".join(base_url.split(".")[:-1])
    return f"{prefix}_files/{level}/{col}_{row}.{fmt}"


def compute_grid(
    descriptor: ImageDescriptor, zoom_level: int, base_url: str
) -> list[TileAddress]:
    """Compute every tile to display at ``zoom_level``, row-major.

    Args:
        descriptor: Parsed image descriptor
        zoom_level: User zoom level (>= 0)
        base_url: URL the descriptor was fetched from

    Returns:
        List of TileAddress, rows ascending then columns ascending

    Raises:
        ValueError: If zoom_level is negative
    """
    if zoom_level < 0:
        raise ValueError(f"zoom_level must be non-negative, got {zoom_level}")

    level = zoom_level + min_level(descriptor.tile_size)
    rows, cols = grid_extent(descriptor, zoom_level)

    addresses = [
        TileAddress(
            row=row,
            col=col,
            level=level,
            url=tile_url(base_url, level, col, row, descriptor.format),
        )
        for row in range(rows + 1)
        for col in range(cols + 1)
    ]
    logger.debug(
        "Grid at zoom %d: level %d, %dx%d tiles", zoom_level, level, rows + 1, cols + 1
    )
    return addresses
