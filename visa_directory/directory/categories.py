"""
Keyword-driven category classification.

Source category labels are free text and inconsistent, so matching is a
permissive substring test against the category, name and address of a
business. A business may land in any number of buckets.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from .models import Business

# Keywords that mark a record as an immigration/visa service provider.
TARGET_KEYWORDS: list[str] = [
    "visa agent",
    "immigration consultants",
    "visa consultants",
    "immigration services",
    "visa services",
    "work visa",
    "visa consulting services",
    "registered visa agent",
    "migration services",
    "overseas consultants",
    "abroad consultants",
    "student visa",
    "business visa",
    "tourist visa",
    "family visa",
    "residence visa",
    "استشارات الهجرة",
    "استشارات الهجرة دبي",
    "registered visa agent dubai",
    "education visa",
    "document clearance",
    "document clearing",
    "business formation",
]

# Navigation buckets shown on the directory landing page.
DEFAULT_BUCKETS: dict[str, list[str]] = {
    "visa-consultants": ["visa consultant", "visa consulting", "visa agent", "visa services"],
    "immigration": ["immigration", "migration", "استشارات الهجرة"],
    "work-visa": ["work visa", "work permit", "employment visa"],
    "student-visa": ["student visa", "education visa", "study abroad", "education consultant"],
    "tourist-visa": ["tourist visa", "visit visa", "travel agency"],
    "family-visa": ["family visa", "residence visa", "golden visa"],
    "business-setup": ["business formation", "business setup", "business set up", "pro services"],
    "document-clearing": ["document clearance", "document clearing", "attestation", "typing"],
}


def _fields(business: Business) -> tuple[str, ...]:
    return tuple(
        value.lower()
        for value in (business.category, business.name, business.address)
        if value
    )


def classify(business: Business, target_keywords: Iterable[str]) -> bool:
    """Return True if any keyword occurs in the category, name or address."""
    fields = _fields(business)
    for keyword in target_keywords:
        needle = keyword.strip().lower()
        if needle and any(needle in field for field in fields):
            return True
    return False


def classify_all(
    businesses: Iterable[Business],
    bucket_keywords: Mapping[str, Iterable[str]] = DEFAULT_BUCKETS,
) -> dict[str, list[Business]]:
    """Group businesses into every bucket they match, keeping input order."""
    keywords = {bucket: list(words) for bucket, words in bucket_keywords.items()}
    buckets: dict[str, list[Business]] = {bucket: [] for bucket in keywords}
    for business in businesses:
        for bucket, words in keywords.items():
            if classify(business, words):
                buckets[bucket].append(business)
    return buckets


def filter_target(businesses: Iterable[Business]) -> list[Business]:
    """Keep businesses flagged upstream or matching ``TARGET_KEYWORDS``."""
    return [b for b in businesses if b.has_target_keyword or classify(b, TARGET_KEYWORDS)]


def category_labels(businesses: Iterable[Business]) -> list[str]:
    labels = {b.category.strip() for b in businesses if b.category and b.category.strip()}
    return sorted(labels, key=str.lower)
