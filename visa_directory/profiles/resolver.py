"""
Resolve an identifier to a single business profile.

Two identifier forms are accepted: the raw business id, and the
``<location>/<name>`` slug pair used in public and legacy links. Slug lookups
scan candidates in ascending id order so that ambiguous names always resolve
the same way.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Sequence, Union

from ..directory.categories import DEFAULT_BUCKETS, classify
from ..directory.models import Business
from .models import ProfileView
from .slugs import canonical_url, normalise_fragment, profile_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdIdentifier:
    id: str

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class SlugIdentifier:
    location_slug: str
    name_slug: str

    def __str__(self) -> str:
        return f"{self.location_slug}/{self.name_slug}"


Identifier = Union[IdIdentifier, SlugIdentifier]


class ProfileNotFound(LookupError):
    """No business matches the identifier; carries it for diagnostics."""

    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        super().__init__(f"No business found for {identifier}")


@dataclass(frozen=True)
class ResolvedProfile:
    business: Business
    canonical: str
    fallback: bool = False

    def matches(self, identifier: Identifier) -> bool:
        """True when ``identifier`` is already the canonical slug of the business."""
        return isinstance(identifier, SlugIdentifier) and str(identifier) == self.canonical


def _stable_order(businesses: Sequence[Business]) -> list[Business]:
    return sorted(businesses, key=lambda b: b.id)


def resolve_id(
    businesses: Sequence[Business],
    business_id: str,
    index: Mapping[str, Business] | None = None,
) -> Business:
    if index is not None:
        business = index.get(business_id)
        if business is not None:
            return business
        raise ProfileNotFound(IdIdentifier(business_id))

    for business in businesses:
        if business.id == business_id:
            return business
    raise ProfileNotFound(IdIdentifier(business_id))


def resolve_slug(
    businesses: Sequence[Business],
    identifier: SlugIdentifier,
    allow_fallback: bool = True,
) -> ResolvedProfile:
    ordered = _stable_order(businesses)
    requested = str(identifier).lower()

    for business in ordered:
        canonical = canonical_url(business)
        if canonical == requested:
            return ResolvedProfile(business, canonical)

    fragment = normalise_fragment(identifier.name_slug)
    if fragment:
        for business in ordered:
            name = normalise_fragment(business.name)
            if name and (fragment in name or name in fragment):
                return ResolvedProfile(business, canonical_url(business))

    if allow_fallback and ordered:
        business = ordered[0]
        logger.warning(
            "No business matches %s; falling back to %s", identifier, business.id,
        )
        return ResolvedProfile(business, canonical_url(business), fallback=True)

    raise ProfileNotFound(identifier)


def resolve(
    businesses: Sequence[Business],
    identifier: Identifier,
    index: Mapping[str, Business] | None = None,
    allow_fallback: bool = True,
) -> ResolvedProfile:
    if isinstance(identifier, IdIdentifier):
        business = resolve_id(businesses, identifier.id, index)
        return ResolvedProfile(business, canonical_url(business))
    return resolve_slug(businesses, identifier, allow_fallback)


def _contact_domain(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())[:20] + ".ae"


def enrich_profile(resolved: ResolvedProfile) -> ProfileView:
    """Fill the display defaults of a profile page from the business record."""
    b = resolved.business
    domain = _contact_domain(b.name)
    email = b.email if b.email and "@" in b.email else f"info@{domain}"
    website = b.website if b.website and b.website.startswith("http") else f"https://www.{domain}"
    description = b.description or (
        f"{b.name} is a professional service provider in Dubai specializing in "
        f"{b.category.lower()}. We provide comprehensive solutions and expert "
        f"consultation for all your business needs with years of experience in the industry."
    )
    return ProfileView(
        business=b,
        canonical_url=resolved.canonical,
        profile_url=profile_path(b),
        description=description,
        services=[
            f"{b.category} Consultation",
            "Document Processing",
            "Application Support",
            "Legal Compliance",
            "Customer Support",
        ],
        established="2020",
        license="Dubai Trade License",
        languages=["English", "Arabic"],
        contact_email=email,
        contact_website=website,
        categories=[bucket for bucket, words in DEFAULT_BUCKETS.items() if classify(b, words)],
        fallback=resolved.fallback,
    )
