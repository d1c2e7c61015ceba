"""dzview - DeepZoom descriptor parsing and tile grid layout."""

__version__ = "0.1.0"
