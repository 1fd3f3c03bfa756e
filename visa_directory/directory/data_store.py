from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..sources.config import DEFAULT_SOURCE_CONFIG, SourceConfig
from ..sources.loader import NoDataFound, load
from . import cache
from .categories import filter_target
from .models import Business

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Directory:
    businesses: list[Business]
    source: str
    version: int
    by_id: dict[str, Business] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.businesses


_directory: Directory | None = None
_version: int = 0


def _build(businesses: Iterable[Business], source: str) -> Directory:
    global _version
    _version += 1
    records: list[Business] = []
    by_id: dict[str, Business] = {}
    for b in businesses:
        if b.id in by_id:
            logger.warning("Duplicate business id %s; keeping the first record", b.id)
            continue
        by_id[b.id] = b
        records.append(b)
    cache.invalidate()
    return Directory(businesses=records, source=source, version=_version, by_id=by_id)


def _load(config: SourceConfig) -> Directory:
    try:
        result = load(config=config)
    except NoDataFound as exc:
        logger.warning(
            "All %d business sources failed; serving an empty directory", len(exc.sources),
        )
        return _build([], "none")

    businesses = result.businesses
    if config.target_keywords_only:
        businesses = filter_target(businesses)
        logger.info(
            "Kept %d immigration/visa businesses out of %d loaded",
            len(businesses), len(result.businesses),
        )
    return _build(businesses, result.source)


def get_directory(config: SourceConfig = DEFAULT_SOURCE_CONFIG) -> Directory:
    """Return the loaded directory, fetching it on first call."""
    global _directory
    if _directory is None:
        _directory = _load(config)
    return _directory


def refresh_directory(config: SourceConfig = DEFAULT_SOURCE_CONFIG) -> Directory:
    """Discard the cached directory and walk the source chain again."""
    global _directory
    _directory = _load(config)
    return _directory


def set_directory(businesses: Iterable[Business], source: str = "memory") -> Directory:
    """Install an already-loaded record set, bypassing the source chain."""
    global _directory
    _directory = _build(businesses, source)
    return _directory


def clear_directory() -> None:
    global _directory
    _directory = None
    cache.invalidate()
