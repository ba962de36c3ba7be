"""Eyebrow (kicker label) detection ahead of Markdown conversion.

Sites often render a short label such as "FEATURED" right before a heading.
Converted naively it ends up glued to neighbouring text, so matching elements
are replaced by ``<p data-llm-eyebrow="true"><em>LABEL</em></p>`` and reach
the converter as a block of emphasized text.
"""

import logging
import re
from collections.abc import Sequence

from bs4 import BeautifulSoup, NavigableString, Tag

from .selectors import compile_selector

logger = logging.getLogger(__name__)

EYEBROW_ATTR = "data-llm-eyebrow"

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

BADGE_SELECTORS = [
    '[class*="badge"]',
    '[class*="chip"]',
    '[class*="label"]',
    '[class*="tag"]',
    '[class*="category"]',
]

EYEBROW_TAGS = {"span", "div", "p", "small"}

MAX_EYEBROW_LENGTH = 40
MAX_EYEBROW_WORDS = 3

_WORD_RE = re.compile(r"[^\W\d_]+(?:['-][^\W\d_]+)*")
_ASCII_CAPITAL_RE = re.compile(r"[A-Z]")


def is_marked(element: Tag) -> bool:
    return element.get(EYEBROW_ATTR) == "true"


def _has_marked_descendant(element: Tag) -> bool:
    return element.find(attrs={EYEBROW_ATTR: "true"}) is not None


def _has_marked_ancestor(element: Tag) -> bool:
    return element.find_parent(attrs={EYEBROW_ATTR: "true"}) is not None


def _is_uppercase(text: str) -> bool:
    # Needs an ASCII capital: "ÉÉ" and caseless scripts never pass
    return text == text.upper() and _ASCII_CAPITAL_RE.search(text) is not None


def word_count(text: str) -> int:
    return len(_WORD_RE.findall(text))


class EyebrowPreprocessor:
    """
    Marks eyebrow labels in a parsed document.

    Two strategies run in order: elements matched by configured selectors are
    always marked; with auto-detection on, short label-like elements right
    before headings, or carrying badge-like classes, are marked as well.
    Marking is idempotent.

    Example:
        preprocessor = EyebrowPreprocessor()
        preprocessor.mark_eyebrows(soup, [".eyebrow"], auto_detect=True)
    """

    def mark_eyebrows(
        self,
        document: BeautifulSoup,
        eyebrow_selectors: Sequence[str],
        auto_detect: bool = True,
    ) -> None:
        """
        Mark eyebrow elements in place.

        Args:
            document: Parsed HTML document
            eyebrow_selectors: CSS selectors whose matches are always eyebrows
            auto_detect: Also apply the heuristic patterns
        """
        for selector in eyebrow_selectors:
            self._mark_by_selector(document, selector)

        if auto_detect:
            self._detect_before_headings(document)
            for selector in BADGE_SELECTORS:
                self._mark_by_selector(document, selector, heuristic=True)

    def looks_like_eyebrow(self, element: Tag) -> bool:
        """
        Check whether an element reads like a short label.

        The element must carry short, non-empty text without links and must
        not already be (or contain) an eyebrow. It then needs at least two of:
        uppercase text, a span/div/p/small tag, three words or fewer.
        """
        if is_marked(element) or _has_marked_descendant(element) or _has_marked_ancestor(element):
            return False

        text = element.get_text().strip()
        if not text or len(text) > MAX_EYEBROW_LENGTH:
            return False

        if element.find("a") is not None:
            return False

        score = 0
        if _is_uppercase(text):
            score += 1
        if element.name.lower() in EYEBROW_TAGS:
            score += 1
        if word_count(text) <= MAX_EYEBROW_WORDS:
            score += 1

        return score >= 2

    def wrap_as_eyebrow(self, document: BeautifulSoup, element: Tag) -> bool:
        """
        Replace element with <p data-llm-eyebrow="true"><em>text</em></p>.

        Returns:
            True if the element was replaced
        """
        if is_marked(element) or _has_marked_descendant(element) or _has_marked_ancestor(element):
            return False

        if element.parent is None:
            return False

        text = element.get_text().strip()
        if not text:
            return False

        element[EYEBROW_ATTR] = "true"

        paragraph = document.new_tag("p", attrs={EYEBROW_ATTR: "true"})
        emphasis = document.new_tag("em")
        emphasis.string = text
        paragraph.append(emphasis)

        element.replace_with(paragraph)
        return True

    def _mark_by_selector(self, document: BeautifulSoup, selector: str, heuristic: bool = False) -> None:
        try:
            elements = compile_selector(selector).select(document)
            for element in elements:
                if heuristic and not self.looks_like_eyebrow(element):
                    continue
                self.wrap_as_eyebrow(document, element)
        except Exception as e:
            logger.debug(f"Eyebrow selector {selector!r} skipped: {e}")

    def _detect_before_headings(self, document: BeautifulSoup) -> None:
        """Mark label-like elements immediately preceding h1-h6."""
        try:
            headings = document.find_all(HEADING_TAGS)
            for heading in headings:
                prev = heading.previous_sibling
                while isinstance(prev, NavigableString) and not prev.strip():
                    prev = prev.previous_sibling

                if isinstance(prev, Tag) and self.looks_like_eyebrow(prev):
                    self.wrap_as_eyebrow(document, prev)
        except Exception as e:
            logger.debug(f"Heading eyebrow detection skipped: {e}")
