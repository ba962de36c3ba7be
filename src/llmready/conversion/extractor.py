"""Main content extraction from parsed HTML documents."""

import logging
from collections.abc import Sequence
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..errors import ExtractionFault
from .protocols import ContentExtractor
from .selectors import compile_selector

logger = logging.getLogger(__name__)


def inner_html(node: Tag) -> str:
    """Serialize the children of node (not node itself) in document order."""
    return node.decode_contents().strip()


def body_inner_html(document: BeautifulSoup) -> str:
    """Return the inner markup of <body>, or '' when the document has none."""
    body = document.find("body")
    if not isinstance(body, Tag):
        return ""
    return inner_html(body)


class DefaultContentExtractor:
    """
    Extracts the first matching content region from a document.

    Ignored elements are removed from the whole document before any content
    selector is tried, so an ignored element nested inside the content region
    is still dropped. The first selector with a match wins; when none match
    the whole <body> is used.

    Example:
        extractor = DefaultContentExtractor()
        html = extractor.extract(soup, ["article", "main"], ["nav", "footer"])
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
            document: Parsed HTML document (ignored elements are removed in place)
            content_selectors: CSS selectors for the content region, in priority order
            ignore_selectors: CSS selectors for elements to remove first

        Returns:
            Inner HTML of the first match, of <body>, or ''
        """
        self._remove_ignored(document, ignore_selectors)

        for selector in content_selectors:
            try:
                match = self._first_match(document, selector)
            except ExtractionFault as e:
                logger.debug(f"Skipping content selector {selector!r}: {e}")
                continue

            if match is not None:
                return inner_html(match)

        return body_inner_html(document)

    def _remove_ignored(self, document: BeautifulSoup, ignore_selectors: Sequence[str]) -> None:
        """Remove every element matched by an ignore selector."""
        for selector in ignore_selectors:
            try:
                # Collect first, then detach: never mutate the tree mid-walk
                to_remove = compile_selector(selector).select(document)
            except Exception as e:
                logger.debug(f"Skipping ignore selector {selector!r}: {e}")
                continue

            for element in to_remove:
                element.extract()

    def _first_match(self, document: BeautifulSoup, selector: str) -> Optional[Tag]:
        """Return the first element matching selector, or None."""
        try:
            matches = compile_selector(selector).select(document)
        except Exception as e:
            raise ExtractionFault(f"{selector!r}: {e}") from e
        return matches[0] if matches else None


class FallbackContentExtractor:
    """
    Returns the entire <body>, ignoring all selectors.

    Use this when CSS selectors don't fit a site's structure.
    """

    def extract(
        self,
        document: BeautifulSoup,
        content_selectors: Sequence[str],
        ignore_selectors: Sequence[str],
    ) -> str:
        return body_inner_html(document)


EXTRACTORS: dict[str, type] = {
    "default": DefaultContentExtractor,
    "fallback": FallbackContentExtractor,
}


def get_extractor(name: str) -> ContentExtractor:
    """
    Create an extractor by name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        extractor_cls = EXTRACTORS[name]
    except KeyError as err:
        known = ", ".join(sorted(EXTRACTORS))
        raise ValueError(f"Unknown extractor {name!r} (expected one of: {known})") from err
    extractor: ContentExtractor = extractor_cls()
    return extractor
