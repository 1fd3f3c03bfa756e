from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReviewConfig:
    minimum_reviews: int = 50
    avatar_base_url: str = "https://ui-avatars.com/api/"


DEFAULT_REVIEW_CONFIG = ReviewConfig()
