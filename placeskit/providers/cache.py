"""
Cache backends for decoded Google Places payloads.

The client only depends on the ``CacheStore`` interface. Two backends are
provided: an in-process ``MemoryCache`` and a ``FileCache`` that keeps one
JSON document per key so results survive between CLI invocations.
"""

import copy
import hashlib
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from .base import CacheStore, Endpoint

logger = logging.getLogger(__name__)


@dataclass
class CacheKey:
    """Structure for generating consistent cache keys."""
    namespace: str
    identifier: str
    api_key: str

    @staticmethod
    def build_identifier(endpoint: Endpoint, params: Dict[str, Any]) -> str:
        """Identifier for an endpoint call: ``<endpoint>_<md5 of params>``."""
        params_json = json.dumps(params, sort_keys=True, ensure_ascii=False, default=str)
        param_hash = hashlib.md5(params_json.encode("utf-8")).hexdigest()
        return f"{endpoint.value}_{param_hash}"

    def generate_key(self) -> str:
        """Generate the storage key; the API key is folded into the hash."""
        digest = hashlib.md5(f"{self.identifier}{self.api_key}".encode("utf-8")).hexdigest()
        return f"{self.namespace}{digest}"


@dataclass
class CacheEntry:
    """Cache entry with metadata and expiration info."""
    key: str
    data: Dict[str, Any]
    created_at: datetime
    expires_at: Optional[datetime] = None
    hit_count: int = 0

    @classmethod
    def create(cls, key: str, data: Dict[str, Any], ttl_seconds: int) -> "CacheEntry":
        now = datetime.utcnow()
        expires_at = now + timedelta(seconds=ttl_seconds) if ttl_seconds > 0 else None
        return cls(key=key, data=data, created_at=now, expires_at=expires_at)

    def is_expired(self) -> bool:
        """Check if this cache entry has expired."""
        if self.expires_at is None:
            return False
        return datetime.utcnow() > self.expires_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "key": self.key,
            "data": self.data,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "hit_count": self.hit_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheEntry":
        """Create cache entry from dictionary."""
        expires_at = data.get("expires_at")
        return cls(
            key=data["key"],
            data=data["data"],
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
            hit_count=data.get("hit_count", 0),
        )


class MemoryCache(CacheStore):
    """
    In-process cache backed by a dictionary.

    Expired entries are evicted lazily when they are read. Payloads are
    copied in and out so callers never share the stored object.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._stats = {"hits": 0, "misses": 0, "sets": 0, "evictions": 0}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None:
            self._stats["misses"] += 1
            return None

        if entry.is_expired():
            del self._entries[key]
            self._stats["evictions"] += 1
            self._stats["misses"] += 1
            return None

        entry.hit_count += 1
        self._stats["hits"] += 1
        return copy.deepcopy(entry.data)

    def set(self, key: str, payload: Dict[str, Any], ttl_seconds: int) -> None:
        self._entries[key] = CacheEntry.create(key, copy.deepcopy(payload), ttl_seconds)
        self._stats["sets"] += 1

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        doomed = [key for key in self._entries if key.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        return dict(self._stats, entries=len(self._entries))


class FileCache(CacheStore):
    """
    Disk-based cache, one JSON file per key.

    Keys are used verbatim as file names, so they must be filesystem-safe
    (the keys produced by ``CacheKey`` are).
    """

    def __init__(self, cache_dir: str = ".places_cache"):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = CacheEntry.from_dict(json.load(f))
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Discarding unreadable cache file {path.name}: {e}")
            path.unlink(missing_ok=True)
            return None

        if entry.is_expired():
            path.unlink(missing_ok=True)
            return None

        return entry.data

    def set(self, key: str, payload: Dict[str, Any], ttl_seconds: int) -> None:
        entry = CacheEntry.create(key, payload, ttl_seconds)
        tmp_path = self._path(key).with_suffix(".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(entry.to_dict(), f, ensure_ascii=False)
        os.replace(tmp_path, self._path(key))

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def delete_by_prefix(self, prefix: str) -> int:
        count = 0
        for path in self.cache_dir.glob(f"{prefix}*.json"):
            path.unlink(missing_ok=True)
            count += 1
        return count
