"""Content conversion for llmready (extraction, eyebrows, Markdown, frontmatter)."""

from .cleaner import MarkdownCleaner
from .extractor import DefaultContentExtractor, FallbackContentExtractor, get_extractor
from .eyebrows import EyebrowPreprocessor
from .markdown import FrontmatterBuilder, HtmlToMarkdown
from .protocols import ContentExtractor, MarkdownConverter
from .selectors import CompiledSelector, compile_selector, query

__all__ = [
    # Protocols
    "ContentExtractor",
    "MarkdownConverter",
    # Selectors
    "CompiledSelector",
    "compile_selector",
    "query",
    # Implementations
    "DefaultContentExtractor",
    "FallbackContentExtractor",
    "get_extractor",
    "EyebrowPreprocessor",
    "HtmlToMarkdown",
    "MarkdownCleaner",
    "FrontmatterBuilder",
]
