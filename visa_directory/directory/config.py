from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class DirectoryConfig:
    page_size: int = int(os.getenv("DIRECTORY_PAGE_SIZE", "25"))
    suggestion_limit: int = int(os.getenv("DIRECTORY_SUGGESTION_LIMIT", "6"))
    cache_ttl: float = float(os.getenv("DIRECTORY_CACHE_TTL", "300"))


DEFAULT_DIRECTORY_CONFIG = DirectoryConfig()
