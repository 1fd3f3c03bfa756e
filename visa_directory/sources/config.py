from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

BUNDLED_SNAPSHOT = Path(__file__).resolve().parent.parent / "data" / "businesses.json"

# Endpoints of the static site and its API, most complete first.
DEFAULT_ENDPOINTS: tuple[str, ...] = (
    "/api/complete-businesses.json",
    "/business-data/businesses.json",
    "/api/dubai-visa-services.json",
    "/api/featured.json",
    "/api/dubai-visa-services?limit=1000",
    "/api/businesses?limit=1000",
)


def _default_sources() -> tuple[str, ...]:
    raw = os.getenv("DIRECTORY_SOURCES", "")
    if raw.strip():
        return tuple(s.strip() for s in raw.split(",") if s.strip())

    base_url = os.getenv("DIRECTORY_BASE_URL", "").rstrip("/")
    sources: list[str] = []
    if base_url:
        sources.extend(f"{base_url}{path}" for path in DEFAULT_ENDPOINTS)
    sources.append(str(BUNDLED_SNAPSHOT))
    return tuple(sources)


@dataclass(frozen=True)
class SourceConfig:
    sources: tuple[str, ...] = _default_sources()
    timeout: float = float(os.getenv("DIRECTORY_SOURCE_TIMEOUT", "10"))
    target_keywords_only: bool = os.getenv("DIRECTORY_TARGET_ONLY", "true").lower() in {"1", "true", "yes"}


DEFAULT_SOURCE_CONFIG = SourceConfig()
