"""Fallback-chain loader for business records."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import requests
from pydantic import ValidationError

from ..directory.models import Business
from .config import DEFAULT_SOURCE_CONFIG, SourceConfig

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

# Canonical field -> accepted spellings, in order of preference.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "reviewCount": ("reviewCount", "review_count", "user_ratings_total"),
    "businessStatus": ("businessStatus", "business_status"),
    "logoUrl": ("logoUrl", "logo_url", "logo_s3_url"),
    "hasTargetKeyword": ("hasTargetKeyword", "has_target_keyword"),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lng"),
}


class NoDataFound(Exception):
    """Raised when every source in the fallback chain was rejected."""

    def __init__(self, sources: Iterable[str]):
        self.sources = list(sources)
        super().__init__(f"No business data found in {len(self.sources)} source(s)")


class SourceRejected(Exception):
    """Raised when a single source does not yield usable records."""


@dataclass(frozen=True)
class LoadResult:
    businesses: list[Business]
    source: str


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_source(source: str, timeout: float) -> str:
    if _is_url(source):
        response = _SESSION.get(source, timeout=timeout)
        response.raise_for_status()
        return response.text
    return Path(source).read_text(encoding="utf-8-sig")


def _looks_like_markup(body: str) -> bool:
    return body.lstrip().startswith("<")


def _extract_records(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("businesses"), list):
        return payload["businesses"]
    return []


def _fallback_id(raw: dict[str, Any]) -> str:
    key = f"{raw.get('name') or ''}|{raw.get('address') or ''}"
    return "fallback-" + hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]


def normalise_record(raw: Any) -> Business | None:
    """Map one raw record onto the Business schema, or ``None`` if unusable."""
    if not isinstance(raw, dict):
        return None

    data = dict(raw)
    for canonical, spellings in _FIELD_ALIASES.items():
        for spelling in spellings:
            if data.get(spelling) not in (None, ""):
                data[canonical] = data[spelling]
                break
        for spelling in spellings:
            if spelling != canonical:
                data.pop(spelling, None)

    if data.get("id") in (None, ""):
        data["id"] = _fallback_id(raw)

    try:
        return Business.model_validate(data)
    except ValidationError:
        logger.warning("Dropping malformed business record id=%s", data.get("id"), exc_info=True)
        return None


def normalise_records(records: Iterable[Any]) -> list[Business]:
    businesses: list[Business] = []
    for raw in records:
        business = normalise_record(raw)
        if business is not None:
            businesses.append(business)
    return businesses


def fetch_source(source: str, timeout: float) -> list[Business]:
    """Fetch and validate one source, raising ``SourceRejected`` on any defect."""
    try:
        body = _read_source(source, timeout)
    except (requests.RequestException, OSError, UnicodeDecodeError) as exc:
        raise SourceRejected(f"request failed: {exc}") from exc

    if _looks_like_markup(body):
        raise SourceRejected("returned markup instead of structured data")

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise SourceRejected(f"invalid JSON: {exc}") from exc

    businesses = normalise_records(_extract_records(payload))
    if not businesses:
        raise SourceRejected("no business records")
    return businesses


def load(
    sources: Iterable[str] | None = None,
    config: SourceConfig = DEFAULT_SOURCE_CONFIG,
) -> LoadResult:
    """
    Return the records of the first acceptable source.

    Sources are tried once each, in order; the first one that answers with a
    non-empty array of records wins and the rest are never contacted.
    Raises ``NoDataFound`` when every source is rejected.
    """
    chain = list(config.sources if sources is None else sources)
    for source in chain:
        logger.info("Trying business source %s", source)
        try:
            businesses = fetch_source(source, config.timeout)
        except SourceRejected as exc:
            logger.warning("Rejected business source %s: %s", source, exc)
            continue
        logger.info("Loaded %d businesses from %s", len(businesses), source)
        return LoadResult(businesses=businesses, source=source)

    raise NoDataFound(chain)
