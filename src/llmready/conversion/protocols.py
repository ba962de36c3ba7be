"""Protocol definitions for content conversion."""

from collections.abc import Sequence
from typing import Protocol

from bs4 import BeautifulSoup


class ContentExtractor(Protocol):
    """
    Protocol for extracting main content from a parsed HTML document.

    Implementations locate the primary content region and return its inner
    markup, removing navigation, headers, footers, ads, etc. They must not
    raise.
    """

    def extract(
        self,
        document: BeautifulSoup,
        content_selectors: Sequence[str],
        ignore_selectors: Sequence[str],
    ) -> str:
        """
        Extract main content from a document.

        Args:
            document: Parsed HTML document (may be mutated)
            content_selectors: CSS selectors for the content region, in priority order
            ignore_selectors: CSS selectors for elements to remove first

        Returns:
            Inner HTML of the content region, or '' when nothing is available
        """
        ...


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML to Markdown.

    Implementations convert cleaned HTML to first-pass Markdown.
    """

    def convert(self, html: str, url: str = "") -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL

        Returns:
            Markdown string
        """
        ...
