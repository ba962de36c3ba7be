"""
llmready - Serve every HTML page as clean markdown for LLM agents.

Usage:
    from llmready import LlmReadyConfig, MarkdownConverterService, SourceResponse

    service = MarkdownConverterService(LlmReadyConfig())
    markdown = service.convert(
        SourceResponse(status_code=200, body=html),
        "https://example.com/pricing",
    )
"""

__version__ = "1.0.0"

from .cache import CacheStore, FileCache, MemoryCache
from .conversion import (
    DefaultContentExtractor,
    EyebrowPreprocessor,
    FallbackContentExtractor,
    FrontmatterBuilder,
    HtmlToMarkdown,
    MarkdownCleaner,
    compile_selector,
    query,
)
from .core.converter import MarkdownConverterService
from .errors import (
    ConversionFault,
    EmptyInputFault,
    ExtractionFault,
    InputTooLargeFault,
    LlmReadyError,
    SelectorCompileError,
)
from .llms_txt import LlmsTxtGenerator
from .models.config import CacheConfig, FrontmatterConfig, LlmReadyConfig, LlmsTxtConfig
from .models.response import RouteInfo, SourceResponse
from .routing import DiscoveryService, RouteFilter

__all__ = [
    "__version__",
    # Core
    "MarkdownConverterService",
    "SourceResponse",
    # Config
    "LlmReadyConfig",
    "CacheConfig",
    "FrontmatterConfig",
    "LlmsTxtConfig",
    # Conversion
    "compile_selector",
    "query",
    "DefaultContentExtractor",
    "FallbackContentExtractor",
    "EyebrowPreprocessor",
    "HtmlToMarkdown",
    "MarkdownCleaner",
    "FrontmatterBuilder",
    # Cache
    "CacheStore",
    "MemoryCache",
    "FileCache",
    # Routing
    "RouteFilter",
    "DiscoveryService",
    "LlmsTxtGenerator",
    "RouteInfo",
    # Errors
    "LlmReadyError",
    "SelectorCompileError",
    "ExtractionFault",
    "ConversionFault",
    "EmptyInputFault",
    "InputTooLargeFault",
]
