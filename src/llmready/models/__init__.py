"""llmready configuration and data models."""

from .config import (
    AutoSectionConfig,
    ByteSize,
    CacheConfig,
    ConverterConfig,
    DiscoveryConfig,
    FrontmatterConfig,
    LimitsConfig,
    LinkEntry,
    LlmReadyConfig,
    LlmsTxtConfig,
    OptionalSectionConfig,
)
from .response import RouteInfo, SourceResponse

__all__ = [
    # Config
    "AutoSectionConfig",
    "ByteSize",
    "CacheConfig",
    "ConverterConfig",
    "DiscoveryConfig",
    "FrontmatterConfig",
    "LimitsConfig",
    "LinkEntry",
    "LlmReadyConfig",
    "LlmsTxtConfig",
    "OptionalSectionConfig",
    # Data
    "RouteInfo",
    "SourceResponse",
]
