"""Core descriptor parsing, grid layout and session state for dzview."""

from .types import ImageDescriptor, TileAddress
from .descriptor import DescriptorParseError, ParseFailure, parse_descriptor, descriptor_fields
from .grid import compute_grid, grid_extent, min_level, tile_url
from .session import (
    FetchFailed,
    FetchSucceeded,
    Session,
    ZoomIn,
    ZoomOut,
    init_session,
    tiles,
    update,
)

__all__ = [
    "ImageDescriptor",
    "TileAddress",
    "DescriptorParseError",
    "ParseFailure",
    "parse_descriptor",
    "descriptor_fields",
    "compute_grid",
    "grid_extent",
    "min_level",
    "tile_url",
    "FetchFailed",
    "FetchSucceeded",
    "Session",
    "ZoomIn",
    "ZoomOut",
    "init_session",
    "tiles",
    "update",
]
