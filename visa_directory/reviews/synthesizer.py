"""
Deterministic review synthesis.

When a business has no authoritative reviews the profile still shows a review
list sized to its declared review count. Output index ``i`` takes the author,
text template and age label at ``i`` modulo the length of each pool. The star
rating is drawn from a fixed distribution using a hash of the business name
and the index, so the same inputs always give the same list.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Iterable
from urllib.parse import urlencode

from ..directory.models import Business
from ..profiles.slugs import create_slug
from .config import DEFAULT_REVIEW_CONFIG, ReviewConfig
from .models import RatingSummary, Review

logger = logging.getLogger(__name__)

AUTHOR_POOL: list[str] = [
    "Ahmed Hassan",
    "Sarah Mitchell",
    "Raj Patel",
    "Maria Santos",
    "Hassan Ali",
    "Jennifer Wong",
    "Mohamed Khan",
    "Lisa Thompson",
    "David Chen",
    "Fatima Al Zahra",
    "Priya Sharma",
    "James O'Connor",
    "Aisha Rahman",
    "Carlos Mendes",
    "Olga Petrova",
    "Omar Siddiqui",
    "Grace Okafor",
]

TEXT_POOL: list[str] = [
    "Excellent service from {name}. They helped me with my work visa application and the process was smooth and professional.",
    "Outstanding experience with {name}. Professional staff, quick processing and clear guidance through every step of my student visa.",
    "Good service overall. The team at {name} was knowledgeable and helped with my family visa application. Some delays but communication was good.",
    "{name} made my tourist visa application easy. Staff were helpful and answered all my questions.",
    "Reliable visa service. {name} handled my business visa and the paperwork went through without problems.",
    "Average service from {name}. The job got done but took longer than expected.",
    "Decent service. {name} processed my application, although I had to follow up a few times for updates.",
    "The consultants at {name} explained the residence visa requirements clearly and checked every document before submission.",
    "Visited {name} for document clearing. Friendly front desk, reasonable fees and a straightforward process.",
    "{name} helped my company with employee visas. Responsive on WhatsApp and kept us informed of each stage.",
    "I used {name} for visa renewal. Processing was on time and the staff were polite.",
    "Mixed experience with {name}. The advice was useful but the waiting time at the office was long.",
]

AGE_POOL: list[str] = [
    "2 days ago",
    "1 week ago",
    "2 weeks ago",
    "3 weeks ago",
    "1 month ago",
    "2 months ago",
    "3 months ago",
    "4 months ago",
    "6 months ago",
    "8 months ago",
    "1 year ago",
]

# (stars, weight out of 100)
RATING_DISTRIBUTION: list[tuple[int, int]] = [(5, 50), (4, 30), (3, 15), (2, 5)]

_AVATAR_COLOURS = ["4285f4", "34a853", "ea4335", "fbbc05", "9c27b0", "00897b"]

_authoritative: dict[str, list[Review]] = {}


def draw_rating(business_name: str, index: int) -> int:
    """Star rating for review ``index`` of ``business_name``."""
    digest = hashlib.sha256(f"{business_name}|{index}".encode("utf-8")).digest()
    roll = int.from_bytes(digest[:8], "big") % 100
    cumulative = 0
    for stars, weight in RATING_DISTRIBUTION:
        cumulative += weight
        if roll < cumulative:
            return stars
    return RATING_DISTRIBUTION[-1][0]


def _avatar_ref(author: str, index: int, config: ReviewConfig) -> str:
    query = urlencode({"name": author, "background": _AVATAR_COLOURS[index % len(_AVATAR_COLOURS)]})
    return f"{config.avatar_base_url}?{query}"


def synthesize(
    business_name: str,
    target_count: int,
    config: ReviewConfig = DEFAULT_REVIEW_CONFIG,
) -> list[Review]:
    """Return ``max(target_count, config.minimum_reviews)`` synthetic reviews."""
    if target_count < 1:
        raise ValueError("target_count must be at least 1")

    count = max(target_count, config.minimum_reviews)
    slug = create_slug(business_name) or "business"
    reviews: list[Review] = []
    for i in range(count):
        author = AUTHOR_POOL[i % len(AUTHOR_POOL)]
        reviews.append(Review(
            id=f"review_{slug}_{i + 1}",
            author_name=author,
            rating=draw_rating(business_name, i),
            text=TEXT_POOL[i % len(TEXT_POOL)].format(name=business_name),
            relative_age=AGE_POOL[i % len(AGE_POOL)],
            avatar_ref=_avatar_ref(author, i, config),
        ))
    return reviews


def set_authoritative_reviews(business_id: str, reviews: Iterable[Review]) -> None:
    _authoritative[business_id] = [r.model_copy(update={"synthetic": False}) for r in reviews]


def clear_authoritative_reviews() -> None:
    _authoritative.clear()


def get_reviews(
    business: Business,
    authoritative: Iterable[Review] | None = None,
    config: ReviewConfig = DEFAULT_REVIEW_CONFIG,
) -> list[Review]:
    """Real reviews when any are on hand, otherwise the synthetic list."""
    real = list(authoritative) if authoritative is not None else _authoritative.get(business.id, [])
    if real:
        return real
    logger.debug("No authoritative reviews for %s; synthesising", business.id)
    return synthesize(business.name, max(config.minimum_reviews, business.review_count), config)


def rating_summary(reviews: Iterable[Review]) -> RatingSummary:
    histogram = {stars: 0 for stars in range(1, 6)}
    total = 0
    for review in reviews:
        histogram[review.rating] += 1
        total += 1
    average = sum(stars * n for stars, n in histogram.items()) / total if total else 0.0
    return RatingSummary(average=round(average, 1), total=total, histogram=histogram)
