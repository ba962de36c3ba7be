"""Caching for converted markdown pages."""

from .manager import (
    DEFAULT_TTL_MINUTES,
    CacheStore,
    FileCache,
    MemoryCache,
    create_cache,
    llms_txt_cache_key,
    page_cache_key,
)

__all__ = [
    "CacheStore",
    "FileCache",
    "MemoryCache",
    "create_cache",
    "page_cache_key",
    "llms_txt_cache_key",
    "DEFAULT_TTL_MINUTES",
]
