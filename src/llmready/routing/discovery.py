"""Helpers for advertising a page's markdown alternate."""

import html
from typing import Optional
from urllib.parse import urlparse

from ..models.config import LlmReadyConfig
from .filters import RouteFilter


class DiscoveryService:
    """
    Builds the markdown URL of a page and the headers/tags pointing at it.

    Example:
        discovery = DiscoveryService(config)
        discovery.markdown_url("https://example.com/docs/intro")
        # 'https://example.com/docs/intro.md'
        discovery.link_header_value("https://example.com/")
        # '<https://example.com/index.md>; rel="alternate"; type="text/markdown"'
    """

    def __init__(self, config: LlmReadyConfig, route_filter: Optional[RouteFilter] = None):
        self._config = config
        self._route_filter = route_filter or RouteFilter(config.exclude_patterns)

    def markdown_url(self, url: str) -> Optional[str]:
        """
        Get the markdown URL for a page URL.

        Returns:
            The .md URL ('/' maps to '/index.md'), or None when disabled or excluded
        """
        if not self._config.enabled:
            return None

        parsed = urlparse(url)
        path = "/" + parsed.path.strip("/")

        if self._route_filter.should_exclude(path):
            return None

        md_path = "/index.md" if path == "/" else path + ".md"
        if parsed.scheme and parsed.netloc:
            return f"{parsed.scheme}://{parsed.netloc}{md_path}"
        return md_path

    def link_header_value(self, url: str) -> Optional[str]:
        """Value for a 'Link' response header, or None if not advertised."""
        if not self._config.discovery.link_header:
            return None

        md_url = self.markdown_url(url)
        if md_url is None:
            return None

        return f'<{md_url}>; rel="alternate"; type="text/markdown"'

    def link_tag(self, url: str) -> str:
        """An HTML <link rel="alternate"> tag, or '' if not advertised."""
        md_url = self.markdown_url(url)
        if md_url is None:
            return ""

        return f'<link rel="alternate" type="text/markdown" href="{html.escape(md_url)}">'
