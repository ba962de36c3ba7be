"""Route filtering and markdown discovery."""

from .discovery import DiscoveryService
from .filters import RouteFilter, url_path

__all__ = [
    "DiscoveryService",
    "RouteFilter",
    "url_path",
]
