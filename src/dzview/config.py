"""Centralized configuration for dzview.

All tunable parameters are defined here with sensible defaults.
Values can be overridden via environment variables.

Environment Variables:
    DZVIEW_FETCH_TIMEOUT: Descriptor request timeout in seconds (default: 10.0)
    DZVIEW_DEFAULT_ZOOM: Zoom level a new session starts at (default: 0)
    DZVIEW_USER_AGENT: User-Agent header sent with descriptor requests
"""

from __future__ import annotations

import logging
import os

from dzview import __version__

logger = logging.getLogger(__name__)


def _get_env_int(name: str, default: int) -> int:
    """Get an integer from environment variable with fallback."""
    value = os.environ.get(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            logger.warning(
                "Invalid integer for %s: %r, using default %d", name, value, default
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Get a float from environment variable with fallback."""
    value = os.environ.get(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            logger.warning(
                "Invalid number for %s: %r, using default %s", name, value, default
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    """Get a string from environment variable with fallback."""
    return os.environ.get(name, default)


# =============================================================================
# Descriptor Fetch
# =============================================================================

#: Timeout for the single descriptor request, in seconds
FETCH_TIMEOUT_S: float = _get_env_float("DZVIEW_FETCH_TIMEOUT", 10.0)

#: User-Agent header for descriptor requests
USER_AGENT: str = _get_env_str("DZVIEW_USER_AGENT", f"dzview/{__version__}")


# =============================================================================
# Viewer
# =============================================================================

#: Zoom level a new session starts at
DEFAULT_ZOOM_LEVEL: int = _get_env_int("DZVIEW_DEFAULT_ZOOM", 0)


# =============================================================================
# Validation
# =============================================================================


def _validate_config() -> None:
    """Validate configuration values and log warnings for out-of-range settings."""
    global FETCH_TIMEOUT_S, DEFAULT_ZOOM_LEVEL

    if FETCH_TIMEOUT_S < 0.1:
        logger.warning(
            "FETCH_TIMEOUT_S=%s is too low, clamping to 0.1", FETCH_TIMEOUT_S
        )
        FETCH_TIMEOUT_S = 0.1

    if DEFAULT_ZOOM_LEVEL < 0:
        logger.warning(
            "DEFAULT_ZOOM_LEVEL=%d is negative, clamping to 0", DEFAULT_ZOOM_LEVEL
        )
        DEFAULT_ZOOM_LEVEL = 0


_validate_config()
