"""Cache stores for converted markdown pages."""

import hashlib
import json
import logging
import os
import tempfile
import threading
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional, Protocol, TypedDict

from ..models.config import CacheConfig

logger = logging.getLogger(__name__)

# Default TTL for cached pages (24 hours)
DEFAULT_TTL_MINUTES = 1440


class CacheStore(Protocol):
    """
    Protocol for key/value stores holding converted pages.

    Concurrent writers for the same key are allowed; the last write wins.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the cached value, or None if missing or expired."""
        ...

    def put(self, key: str, value: str, ttl_minutes: Optional[int] = None) -> None:
        """Store a value (ttl_minutes=None keeps it until forgotten)."""
        ...

    def forget(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        ...

    def clear(self, prefix: str = "") -> int:
        """Remove every key starting with prefix. Returns the number removed."""
        ...


def page_cache_key(prefix: str, url: str) -> str:
    """Cache key for a page: '<prefix>:page:<md5 of url>'."""
    digest = hashlib.md5(url.encode("utf-8")).hexdigest()
    return f"{prefix}:page:{digest}"


def llms_txt_cache_key(prefix: str) -> str:
    return f"{prefix}:sitemap"


class MemoryCache:
    """In-process cache with per-entry expiry, safe to share between threads.

    Expired entries are dropped when read and swept from ``put`` at most once
    per ``PURGE_INTERVAL_SECONDS``. With ``max_entries`` set, a full cache
    evicts its oldest write first.
    """

    PURGE_INTERVAL_SECONDS = 60

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        max_entries: Optional[int] = None,
    ) -> None:
        self._entries: dict[str, tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._max_entries = max_entries
        self._next_purge = clock() + self.PURGE_INTERVAL_SECONDS

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl_minutes: Optional[int] = None) -> None:
        now = self._clock()
        expires_at = None if ttl_minutes is None else now + ttl_minutes * 60
        with self._lock:
            if now >= self._next_purge:
                self._purge_expired(now)
            # Re-inserting moves the key to the newest position
            self._entries.pop(key, None)
            if self._max_entries is not None and len(self._entries) >= self._max_entries:
                self._purge_expired(now)
                while len(self._entries) >= self._max_entries:
                    oldest = next(iter(self._entries))
                    del self._entries[oldest]
                    logger.debug(f"Evicted cache entry {oldest}")
            self._entries[key] = (value, expires_at)

    def _purge_expired(self, now: float) -> None:
        expired = [
            key for key, (_, expires_at) in self._entries.items() if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
        self._next_purge = now + self.PURGE_INTERVAL_SECONDS

    def forget(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self, prefix: str = "") -> int:
        with self._lock:
            keys = [key for key in self._entries if key.startswith(prefix)]
            for key in keys:
                del self._entries[key]
        return len(keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class CacheEntry(TypedDict, total=False):
    """On-disk format of a FileCache entry."""

    key: str
    value: str
    stored_at: str
    expires_at: Optional[str]


class FileCache:
    """Cache that keeps one JSON file per key in a directory.

    Features:
    - Atomic writes: entries are written to a temp file and renamed
    - TTL support: expired entries are dropped on read
    - Corrupt or unreadable entries are treated as misses
    """

    def __init__(self, cache_dir: Path, clock: Callable[[], datetime] = datetime.now):
        """Initialize the file cache.

        Args:
            cache_dir: Directory to store cache files
            clock: Returns the current time
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def _load(self, path: Path) -> Optional[CacheEntry]:
        try:
            with open(path, encoding="utf-8") as f:
                data: CacheEntry = json.load(f)
                return data
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read cache entry {path.name}: {e}")
            return None

    def _is_expired(self, entry: CacheEntry) -> bool:
        expires_at = entry.get("expires_at")
        if not expires_at:
            return False
        try:
            return self._clock() >= datetime.fromisoformat(expires_at)
        except ValueError:
            return True

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        entry = self._load(path)
        if entry is None or entry.get("key") != key:
            return None
        if self._is_expired(entry):
            self._unlink(path)
            return None
        return entry.get("value")

    def put(self, key: str, value: str, ttl_minutes: Optional[int] = None) -> None:
        now = self._clock()
        entry: CacheEntry = {
            "key": key,
            "value": value,
            "stored_at": now.isoformat(),
            "expires_at": None if ttl_minutes is None else (now + timedelta(minutes=ttl_minutes)).isoformat(),
        }

        path = self._path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entry, f, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as e:
            logger.error(f"Could not write cache entry for {key}: {e}")
            self._unlink(Path(tmp_name))

    def forget(self, key: str) -> bool:
        return self._unlink(self._path_for(key))

    def clear(self, prefix: str = "") -> int:
        removed = 0
        for path in self.cache_dir.glob("*.json"):
            entry = self._load(path)
            key = entry.get("key", "") if entry else ""
            if key.startswith(prefix) and self._unlink(path):
                removed += 1
        if removed:
            logger.info(f"Removed {removed} cache entries")
        return removed

    @staticmethod
    def _unlink(path: Path) -> bool:
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False


def create_cache(config: CacheConfig) -> CacheStore:
    """Build the store described by config (file cache when a directory is set)."""
    if config.directory is not None:
        return FileCache(config.directory)
    return MemoryCache(max_entries=config.max_entries)
