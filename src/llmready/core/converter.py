"""Conversion of HTML responses into markdown documents."""

import logging
from http import HTTPStatus
from typing import Optional

from bs4 import BeautifulSoup

from ..cache.manager import CacheStore, create_cache, llms_txt_cache_key, page_cache_key
from ..conversion.cleaner import MarkdownCleaner
from ..conversion.extractor import get_extractor
from ..conversion.eyebrows import EyebrowPreprocessor
from ..conversion.markdown import FrontmatterBuilder, HtmlToMarkdown
from ..conversion.protocols import ContentExtractor, MarkdownConverter
from ..errors import EmptyInputFault, InputTooLargeFault
from ..models.config import LlmReadyConfig
from ..models.response import SourceResponse

logger = logging.getLogger(__name__)

NO_CONTENT_MARKDOWN = "# No Content\n\nNo main content could be extracted from this page.\n"


def _status_message(status_code: int) -> str:
    if status_code == 404:
        return "Page not found"
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Request failed"


class MarkdownConverterService:
    """
    Turns an HTML response into a markdown document.

    Steps: cache lookup, upstream error passthrough, frontmatter, eyebrow
    marking, content extraction, HTML to Markdown, cleanup, cache store.
    ``convert`` never raises: failures become an error document.

    Example:
        service = MarkdownConverterService(LlmReadyConfig())
        markdown = service.convert(
            SourceResponse(status_code=200, body=html_bytes),
            "https://example.com/docs/intro",
        )
    """

    def __init__(
        self,
        config: Optional[LlmReadyConfig] = None,
        extractor: Optional[ContentExtractor] = None,
        preprocessor: Optional[EyebrowPreprocessor] = None,
        cleaner: Optional[MarkdownCleaner] = None,
        converter: Optional[MarkdownConverter] = None,
        frontmatter: Optional[FrontmatterBuilder] = None,
        cache: Optional[CacheStore] = None,
    ):
        """
        Initialize the service.

        Args:
            config: Configuration (defaults to LlmReadyConfig())
            extractor: Content extractor (uses config.extractor if None)
            preprocessor: Eyebrow preprocessor (uses default if None)
            cleaner: Markdown cleaner (uses default if None)
            converter: HTML to Markdown converter (uses default if None)
            frontmatter: Frontmatter builder (uses default if None)
            cache: Cache store (built from config.cache if None)
        """
        self.config = config or LlmReadyConfig()
        self._extractor = extractor or get_extractor(self.config.extractor)
        self._preprocessor = preprocessor or EyebrowPreprocessor()
        self._cleaner = cleaner or MarkdownCleaner()
        self._converter = converter or HtmlToMarkdown(table_support=self.config.converter.table_support)
        self._frontmatter = frontmatter or FrontmatterBuilder()
        self._cache = cache if cache is not None else create_cache(self.config.cache)

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def cache_enabled(self) -> bool:
        return self.config.cache.enabled

    def cache_key(self, url: str) -> str:
        """Cache key for a page URL."""
        return page_cache_key(self.config.cache.prefix, url)

    def convert(self, response: SourceResponse, original_url: str) -> str:
        """
        Convert an HTTP response to markdown.

        Args:
            response: The original HTML response
            original_url: Canonical URL of the page

        Returns:
            Markdown document (an error document if conversion is impossible)
        """
        if self.cache_enabled:
            cached = self._cache.get(self.cache_key(original_url))
            if cached is not None:
                logger.debug(f"Cache hit for {original_url}")
                return cached

        if response.is_error:
            status = response.status_code
            return self.generate_error_markdown(original_url, status, _status_message(status))

        try:
            html = self._read_body(response)
        except (EmptyInputFault, InputTooLargeFault) as e:
            return self.generate_error_markdown(original_url, 500, str(e))

        try:
            markdown = self.convert_html(html, original_url)
        except Exception as e:
            logger.warning(f"Failed to convert HTML to markdown for {original_url}: {e}")
            return self.generate_error_markdown(original_url, 500, "Conversion failed")

        if self.cache_enabled:
            self._cache.put(self.cache_key(original_url), markdown, self.config.cache.ttl_minutes)

        return markdown

    def convert_html(self, html: str, url: str) -> str:
        """
        Convert an HTML document to markdown, without caching.

        Args:
            html: Full HTML document
            url: Canonical URL of the page

        Returns:
            Frontmatter followed by the cleaned markdown body

        Raises:
            ConversionFault: If the HTML to Markdown converter fails
        """
        document = BeautifulSoup(html, "html.parser")

        # Frontmatter reads <title>/<h1> before the document is rewritten
        frontmatter = self._frontmatter.generate(document, url, self.config.frontmatter)

        self._preprocessor.mark_eyebrows(
            document,
            self.config.eyebrow_selectors,
            self.config.eyebrow_auto_detect,
        )

        extracted_html = self._extractor.extract(
            document,
            self.config.content_selectors,
            self.config.ignore_selectors,
        )

        if not extracted_html:
            logger.debug(f"No content extracted from {url}")
            return frontmatter + NO_CONTENT_MARKDOWN

        markdown = self._converter.convert(extracted_html, url)
        return frontmatter + self._cleaner.clean(markdown)

    def generate_error_markdown(self, url: str, status_code: int, message: str = "Page not found") -> str:
        """
        Build the markdown document returned for failed requests.

        Args:
            url: Page URL
            status_code: HTTP status to report
            message: Human-readable reason

        Returns:
            Error frontmatter and body
        """
        if status_code == 404:
            title = "Page Not Found"
            content = f"# {title}\n\nThe requested page could not be found at this URL.\n"
        elif status_code == 500:
            title = "Server Error"
            content = f"# {title}\n\nAn error occurred while processing this page: {message}\n"
        else:
            title = f"Error {status_code}"
            content = f"# {title}\n\n{message}\n"

        return self._frontmatter.generate_error(url, status_code, message, title=title) + content

    def clear_cache(self, url: Optional[str] = None) -> int:
        """
        Clear cached markdown.

        Args:
            url: Clear only this page (None clears every entry under the prefix)

        Returns:
            Number of entries removed
        """
        if url is not None:
            return int(self._cache.forget(self.cache_key(url)))

        prefix = self.config.cache.prefix
        removed = int(self._cache.forget(llms_txt_cache_key(prefix)))
        removed += self._cache.clear(f"{prefix}:")
        logger.info(f"Cleared {removed} cached markdown entries")
        return removed

    def _read_body(self, response: SourceResponse) -> str:
        try:
            html = response.text()
        except (UnicodeError, AttributeError, TypeError) as e:
            raise EmptyInputFault("Unreadable response received") from e

        if not html.strip():
            raise EmptyInputFault("Empty response received")

        limit = self.config.limits.max_input_bytes
        if limit is not None and len(html.encode("utf-8")) > limit:
            raise InputTooLargeFault(f"Response too large (limit {limit} bytes)")

        return html
