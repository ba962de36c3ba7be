"""Conversion orchestration."""

from .converter import NO_CONTENT_MARKDOWN, MarkdownConverterService

__all__ = [
    "MarkdownConverterService",
    "NO_CONTENT_MARKDOWN",
]
