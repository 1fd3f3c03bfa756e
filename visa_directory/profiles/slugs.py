from __future__ import annotations

import re

from ..directory.models import Business

DEFAULT_LOCATION = "dubai"

# Checked in order; the first emirate found in the address wins.
KNOWN_LOCATIONS: list[tuple[str, str]] = [
    ("dubai", "dubai"),
    ("abu dhabi", "abu-dhabi"),
    ("sharjah", "sharjah"),
    ("ajman", "ajman"),
    ("fujairah", "fujairah"),
    ("ras al khaimah", "ras-al-khaimah"),
    ("umm al quwain", "umm-al-quwain"),
    ("al ain", "al-ain"),
]

_NON_SLUG = re.compile(r"[^a-z0-9\s]")
_SPACES = re.compile(r"\s+")
_DASHES = re.compile(r"-+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def create_slug(text: str) -> str:
    """Lower-case ``text`` and reduce it to ``[a-z0-9-]`` words joined by dashes."""
    slug = _NON_SLUG.sub("", (text or "").lower())
    slug = _SPACES.sub("-", slug.strip())
    slug = _DASHES.sub("-", slug)
    return slug.strip("-")


def normalise_fragment(text: str) -> str:
    """Lower-case and drop everything but letters and digits."""
    return _NON_ALNUM.sub("", (text or "").lower())


def location_slug(address: str | None) -> str:
    address_lower = (address or "").lower()
    for city, slug in KNOWN_LOCATIONS:
        if city in address_lower:
            return slug
    first_segment = address_lower.split(",")[0]
    return create_slug(first_segment) or DEFAULT_LOCATION


def name_slug(name: str) -> str:
    return create_slug(name)


def canonical_url(business: Business) -> str:
    """``<location>/<name>`` key that is the single public address of a profile."""
    name = name_slug(business.name) or create_slug(business.id) or "business"
    return f"{location_slug(business.address)}/{name}"


def profile_path(business: Business) -> str:
    return f"/modern-profile/{canonical_url(business)}"


def shareable_url(business: Business, base_url: str = "") -> str:
    return f"{base_url.rstrip('/')}{profile_path(business)}"
