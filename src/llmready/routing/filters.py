"""Route exclusion for markdown conversion."""

import fnmatch
from typing import Optional
from urllib.parse import urlparse

MD_EXTENSION = ".md"


def url_path(url: str) -> str:
    """Return the path of a URL or path string, always with a leading slash."""
    path = urlparse(url).path
    if not path.startswith("/"):
        path = "/" + path
    return path


class RouteFilter:
    """
    Decides which URLs get a markdown alternate.

    Patterns are glob-style and case-insensitive, and '*' also matches '/'.
    A pattern ending in '/*' matches the bare prefix and every nested path,
    so '/api/*' covers '/api', '/api/users' and '/api/users/1'.

    Example:
        route_filter = RouteFilter(exclude_patterns=["/admin/*", "*/login"])
        route_filter.should_exclude("https://example.com/admin/users")  # True
        route_filter.should_process("https://example.com/docs.md")  # True
    """

    def __init__(self, exclude_patterns: Optional[list[str]] = None):
        """
        Initialize the route filter.

        Args:
            exclude_patterns: Patterns for paths that must not be converted
        """
        self.exclude_patterns = exclude_patterns or []

    def should_exclude(self, url: str) -> bool:
        """
        Check if a URL (or bare path) is excluded from conversion.

        Args:
            url: Absolute URL or path

        Returns:
            True if any exclude pattern matches the path
        """
        path = url_path(url)
        return any(self._matches(path, pattern) for pattern in self.exclude_patterns)

    def should_process(self, url: str) -> bool:
        """Check if a URL is a markdown request for a convertible page."""
        path = url_path(url)
        if not path.endswith(MD_EXTENSION):
            return False
        return not self.should_exclude(self.strip_md_extension(path))

    @staticmethod
    def strip_md_extension(url: str) -> str:
        if url.endswith(MD_EXTENSION):
            return url[: -len(MD_EXTENSION)]
        return url

    @staticmethod
    def _matches(path: str, pattern: str) -> bool:
        if not pattern.startswith(("/", "*")):
            pattern = "/" + pattern

        if pattern.endswith("/*"):
            prefix = pattern[:-2]
            if path == prefix or path.startswith(prefix + "/"):
                return True

        return fnmatch.fnmatchcase(path.lower(), pattern.lower())
