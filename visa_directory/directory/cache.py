"""TTL cache for ordered query results, scoped to one loaded directory."""
from __future__ import annotations

import hashlib
import json
import time
from typing import Any

from .config import DEFAULT_DIRECTORY_CONFIG

_entries: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0


def _make_key(version: int, query_dict: dict) -> str:
    normalized = json.dumps({"v": version, **query_dict}, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def lookup(
    version: int,
    query_dict: dict,
    ttl: float = DEFAULT_DIRECTORY_CONFIG.cache_ttl,
) -> list[str] | None:
    """Return the cached ordered business ids for a query, if still fresh."""
    global _hits, _misses
    key = _make_key(version, query_dict)
    entry = _entries.get(key)
    if entry and time.time() - entry["created_at"] < ttl:
        _hits += 1
        return entry["ids"]
    if entry:
        del _entries[key]
    _misses += 1
    return None


def store(version: int, query_dict: dict, ids: list[str]) -> None:
    _entries[_make_key(version, query_dict)] = {"ids": list(ids), "created_at": time.time()}


def invalidate() -> None:
    """Drop every entry; called whenever the directory is reloaded."""
    _entries.clear()


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_entries),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    invalidate()
    _hits = 0
    _misses = 0
