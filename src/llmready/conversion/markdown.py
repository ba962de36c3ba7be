"""HTML to Markdown conversion and YAML frontmatter."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable

import yaml
from bs4 import BeautifulSoup, Tag
from markdownify import ATX, markdownify

from ..errors import ConversionFault
from ..models.config import FrontmatterConfig

logger = logging.getLogger(__name__)

TABLE_TAGS = ["table", "caption", "thead", "tbody", "tfoot", "tr", "th", "td"]

# Wide enough that PyYAML never folds long titles or descriptions
_YAML_WIDTH = 10_000


class HtmlToMarkdown:
    """
    Converts extracted HTML to first-pass Markdown.

    Uses markdownify with ATX headings and '-' bullets. The output still
    carries converter artifacts; run it through MarkdownCleaner afterwards.

    Example:
        converter = HtmlToMarkdown(table_support=True)
        markdown = converter.convert(html_string, "https://example.com/page")
    """

    def __init__(
        self,
        table_support: bool = True,
        bullets: str = "-",
        escape_underscores: bool = True,
    ):
        """
        Initialize the Markdown converter.

        Args:
            table_support: Render tables as GFM tables (False flattens them to text)
            bullets: Bullet characters cycled per list nesting level
            escape_underscores: Escape '_' in text content
        """
        self.table_support = table_support
        self._options: dict[str, Any] = {
            "heading_style": ATX,
            "bullets": bullets,
            "escape_underscores": escape_underscores,
        }
        if not table_support:
            self._options["strip"] = TABLE_TAGS

    def convert(self, html: str, url: str = "") -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL (used for diagnostics)

        Returns:
            Markdown string

        Raises:
            ConversionFault: If the converter fails
        """
        try:
            markdown: str = markdownify(html, **self._options)
        except Exception as e:
            raise ConversionFault(f"Failed to convert HTML to Markdown for {url or '<html>'}: {e}") from e
        return markdown


def _clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _meta_content(document: BeautifulSoup, **attrs: str) -> str:
    meta = document.find("meta", attrs=attrs)
    if isinstance(meta, Tag):
        content = meta.get("content")
        if isinstance(content, str):
            return _clean_text(content)
    return ""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FrontmatterBuilder:
    """
    Builds YAML frontmatter for Markdown documents.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.generate(soup, "https://example.com/page", FrontmatterConfig())
        # ---
        # title: Getting Started
        # url: https://example.com/page
        # last_modified: '2026-01-01T00:00:00+00:00'
        # ---
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        """
        Initialize the builder.

        Args:
            clock: Returns the current time (timezone-aware)
        """
        self._clock = clock

    def timestamp(self) -> str:
        """Current time in ISO-8601."""
        return self._clock().isoformat(timespec="seconds")

    def generate(self, document: BeautifulSoup, url: str, config: FrontmatterConfig | None = None) -> str:
        """
        Build the frontmatter for a page.

        Args:
            document: Parsed HTML document
            url: Canonical page URL
            config: Which fields to include

        Returns:
            Frontmatter block, or '' if no field is available
        """
        config = config or FrontmatterConfig()
        fields: dict[str, Any] = {}

        if config.include_title:
            title = self.extract_title(document)
            if title:
                fields["title"] = title

        if config.include_description:
            description = self.extract_description(document)
            if description:
                fields["description"] = description

        if config.include_url:
            fields["url"] = url

        if config.include_last_modified:
            fields["last_modified"] = self.timestamp()

        for key, value in config.custom_fields.items():
            if value is not None and value != "":
                fields[key] = value

        return self.build(fields)

    def generate_error(self, url: str, status_code: int, message: str, title: str = "Page Not Found") -> str:
        """Build the frontmatter for an error document."""
        return self.build(
            {
                "title": title,
                "url": url,
                "status": status_code,
                "error": message,
                "generated_at": self.timestamp(),
            }
        )

    def build(self, fields: Mapping[str, Any]) -> str:
        """
        Serialize fields as a frontmatter block.

        Returns:
            YAML between '---' lines followed by a blank line, or '' if empty
        """
        if not fields:
            return ""

        body = yaml.safe_dump(
            dict(fields),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=_YAML_WIDTH,
        )
        return f"---\n{body}---\n\n"

    def extract_title(self, document: BeautifulSoup) -> str:
        """Page title from <title>, the first <h1>, or og:title."""
        for tag_name in ("title", "h1"):
            tag = document.find(tag_name)
            if isinstance(tag, Tag):
                title = _clean_text(tag.get_text())
                if title:
                    return title

        return _meta_content(document, property="og:title")

    def extract_description(self, document: BeautifulSoup) -> str:
        """Page description from meta description or og:description."""
        return _meta_content(document, name="description") or _meta_content(
            document, property="og:description"
        )
