"""CSS selector compilation and querying for BeautifulSoup documents."""

import logging
from functools import lru_cache
from typing import Any, Optional

import soupsieve
from bs4 import Tag

from ..errors import SelectorCompileError

logger = logging.getLogger(__name__)


class CompiledSelector:
    """
    A CSS selector compiled into a tree predicate.

    Invalid selectors compile to an instance that matches nothing, so callers
    can walk a list of selectors without guarding each one.

    Example:
        headline = compile_selector('[class*="headline"]')
        if headline(tag):
            ...
        for tag in headline.select(soup):
            ...
    """

    __slots__ = ("pattern", "_matcher")

    def __init__(self, pattern: str, matcher: Optional[soupsieve.SoupSieve] = None):
        self.pattern = pattern
        self._matcher = matcher

    @property
    def valid(self) -> bool:
        return self._matcher is not None

    def __call__(self, node: Any) -> bool:
        if self._matcher is None or not isinstance(node, Tag):
            return False
        return bool(self._matcher.match(node))

    def select(self, root: Tag) -> list[Tag]:
        """Return every matching descendant of root, in document order."""
        if self._matcher is None:
            return []
        return list(self._matcher.select(root))

    def __repr__(self) -> str:
        state = "" if self.valid else ", invalid"
        return f"CompiledSelector({self.pattern!r}{state})"


def parse_selector(selector: str) -> soupsieve.SoupSieve:
    """
    Compile a selector strictly.

    Raises:
        SelectorCompileError: If the selector is empty or malformed
    """
    if not isinstance(selector, str) or not selector.strip():
        raise SelectorCompileError(str(selector), "empty selector")
    try:
        return soupsieve.compile(selector.strip())
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorCompileError(selector, str(e)) from e
    except (TypeError, ValueError) as e:
        raise SelectorCompileError(selector, str(e)) from e


@lru_cache(maxsize=512)
def _compile_cached(selector: str) -> CompiledSelector:
    try:
        return CompiledSelector(selector, parse_selector(selector))
    except SelectorCompileError as e:
        logger.debug(f"{e}; it will match nothing")
        return CompiledSelector(selector)


def compile_selector(selector: str) -> CompiledSelector:
    """Compile a selector, degrading to a never-matching one on bad syntax."""
    if not isinstance(selector, str):
        return CompiledSelector(repr(selector))
    return _compile_cached(selector)


def query(root: Tag, selector: str) -> list[Tag]:
    """Return the elements under root matched by selector (empty if invalid)."""
    return compile_selector(selector).select(root)
