"""
Time-limited cache for Yelp responses.

Two backends share the same get/set/clear contract: a JSON-file-per-key store
(survives restarts) and a process-local dict (tests, single-worker dev).
"""

import hashlib
import json
import logging
import shutil
import time
from pathlib import Path
from typing import Any

from app.core.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


def build_cache_key(*parts: Any) -> str:
    """Join key parts into one deterministic string, e.g. 'Paris, France-restaurants--False-1'."""
    return "-".join("" if part is None else str(part) for part in parts)


class FileYelpCache:
    """Stores each entry as <cache_dir>/<sha256(key)>.json with its timestamp and TTL."""

    def __init__(self, cache_dir: str | Path, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        self.cache_dir = Path(cache_dir)
        self.ttl_seconds = ttl_seconds
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def get(self, key: str) -> Any | None:
        path = self._path_for(key)
        if not path.exists():
            return None

        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
            if time.time() - entry["timestamp"] > entry["ttl"]:
                path.unlink(missing_ok=True)
                return None
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"[YelpCache] Failed to read entry for '{key}': {e}")
            return None

        logger.info(f"[YelpCache] Cache hit for '{key}'")
        return entry["data"]

    def set(self, key: str, data: Any, ttl_seconds: int | None = None) -> None:
        entry = {
            "data": data,
            "timestamp": time.time(),
            "ttl": self.ttl_seconds if ttl_seconds is None else ttl_seconds,
        }
        try:
            self._path_for(key).write_text(json.dumps(entry), encoding="utf-8")
            logger.info(f"[YelpCache] Cached results for '{key}'")
        except (OSError, TypeError) as e:
            logger.warning(f"[YelpCache] Failed to write entry for '{key}': {e}")

    def clear(self) -> None:
        shutil.rmtree(self.cache_dir, ignore_errors=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logger.info("[YelpCache] Cache cleared")


class MemoryYelpCache:
    """Dict-backed cache; entries are (expires_at, data)."""

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, data = entry
        if time.time() > expires_at:
            del self._entries[key]
            return None
        logger.info(f"[YelpCache] Cache hit for '{key}'")
        return data

    def set(self, key: str, data: Any, ttl_seconds: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = (time.time() + ttl, data)

    def clear(self) -> None:
        self._entries.clear()


def create_yelp_cache(settings: Settings) -> FileYelpCache | MemoryYelpCache:
    if settings.yelp_cache_backend == "memory":
        return MemoryYelpCache(settings.yelp_cache_ttl_seconds)
    return FileYelpCache(settings.yelp_cache_dir, settings.yelp_cache_ttl_seconds)
