"""Viewer session state and its update function.

A session is an immutable record. Each external event (descriptor fetch
completed, zoom in, zoom out) is applied with :func:`update`, which returns
a new record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from dzview.config import DEFAULT_ZOOM_LEVEL
from dzview.core.descriptor import DescriptorParseError, ParseFailure, parse_descriptor
from dzview.core.grid import compute_grid
from dzview.core.types import ImageDescriptor, TileAddress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchSucceeded:
    """The descriptor request completed with a response body."""

    text: str


@dataclass(frozen=True)
class FetchFailed:
    """The descriptor request failed at the transport or HTTP level."""

    reason: str


@dataclass(frozen=True)
class ZoomIn:
    pass


@dataclass(frozen=True)
class ZoomOut:
    pass


Event = Union[FetchSucceeded, FetchFailed, ZoomIn, ZoomOut]


@dataclass(frozen=True)
class Session:
    """State of one viewer session.

    Attributes:
        url: Descriptor URL, fixed for the session lifetime
        zoom_level: Current user zoom level (never negative)
        descriptor: Parsed descriptor, if the fetch and parse succeeded
        fetch_error: Transport failure reason, if the fetch failed
        parse_error: Structured parse failure, if the body was malformed
    """

    url: str
    zoom_level: int = 0
    descriptor: ImageDescriptor | None = None
    fetch_error: str | None = None
    parse_error: ParseFailure | None = None

    @property
    def status(self) -> str:
        if self.descriptor is not None:
            return "loaded"
        if self.fetch_error is not None:
            return "fetch_failed"
        if self.parse_error is not None:
            return "parse_failed"
        return "loading"


def init_session(url: str, zoom_level: int = DEFAULT_ZOOM_LEVEL) -> Session:
    """Create the session for ``url`` before its descriptor is fetched."""
    return Session(url=url, zoom_level=max(zoom_level, 0))


def update(session: Session, event: Event) -> Session:
    """Apply one event to ``session`` and return the resulting session."""
    if isinstance(event, FetchSucceeded):
        try:
            descriptor = parse_descriptor(event.text)
        except DescriptorParseError as e:
            logger.warning("Invalid descriptor from %s: %s", session.url, e)
            return replace(session, descriptor=None, fetch_error=None, parse_error=e.failure)
        logger.info(
            "Loaded descriptor from %s: %dx%d, tile size %d",
            session.url, descriptor.width, descriptor.height, descriptor.tile_size,
        )
        return replace(session, descriptor=descriptor, fetch_error=None, parse_error=None)

    if isinstance(event, FetchFailed):
        return replace(session, descriptor=None, fetch_error=event.reason, parse_error=None)

    if isinstance(event, ZoomIn):
        return replace(session, zoom_level=session.zoom_level + 1)

    if isinstance(event, ZoomOut):
        # Clamp at zero; zooming out at the top level is a no-op
        return replace(session, zoom_level=max(session.zoom_level - 1, 0))

    raise TypeError(f"Unknown session event: {event!r}")


def tiles(session: Session) -> list[TileAddress]:
    """Tiles to render for ``session``; empty until a descriptor is loaded."""
    if session.descriptor is None:
        return []
    return compute_grid(session.descriptor, session.zoom_level, session.url)
