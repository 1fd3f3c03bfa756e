"""
Directory search engine.

Responsibilities:
- Apply the free-text, category and minimum-rating filters in that order.
- Sort the survivors by the requested field with a stable sort.
- Produce type-ahead suggestions for the search box.
"""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

import pandas as pd

from .models import Business, DirectoryQuery, SortField, SortOrder

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    SortField.name: "name_key",
    SortField.rating: "rating_key",
    SortField.reviews: "reviews_key",
    SortField.reports: "reports_key",
}


def _build_frame(
    businesses: Sequence[Business],
    report_counts: Mapping[str, int],
) -> pd.DataFrame:
    df = pd.DataFrame({
        "pos": range(len(businesses)),
        "name_lower": [b.name.lower() for b in businesses],
        "address_lower": [(b.address or "").lower() for b in businesses],
        "category_lower": [(b.category or "").lower() for b in businesses],
        "rating": pd.Series([b.rating for b in businesses], dtype="float64"),
    })
    df["name_key"] = [b.name.casefold() for b in businesses]
    df["rating_key"] = df["rating"].fillna(0.0)
    df["reviews_key"] = [b.review_count for b in businesses]
    df["reports_key"] = [int(report_counts.get(b.id, 0)) for b in businesses]
    return df


def query(
    businesses: Sequence[Business],
    q: DirectoryQuery,
    report_counts: Mapping[str, int] | None = None,
) -> list[Business]:
    """Return the businesses matching ``q``, ordered by its sort field and direction.

    Never raises for a well-formed query; no matches is an empty list.
    """
    if not businesses:
        return []

    df = _build_frame(businesses, report_counts or {})
    mask = pd.Series(True, index=df.index)

    term = q.search_term.strip().lower()
    if term:
        mask = mask & (
            df["name_lower"].str.contains(term, regex=False)
            | df["address_lower"].str.contains(term, regex=False)
            | df["category_lower"].str.contains(term, regex=False)
        )

    category = q.category_filter.strip().lower()
    if category and category != "all":
        mask = mask & df["category_lower"].str.contains(category, regex=False)

    # A zero threshold admits unrated businesses too.
    if q.min_rating > 0:
        mask = mask & (df["rating"] >= q.min_rating)

    candidates = df.loc[mask]
    ordered = candidates.sort_values(
        _SORT_COLUMNS[q.sort_by],
        ascending=q.sort_order == SortOrder.asc,
        kind="stable",
    )
    logger.debug(
        "Query term=%r category=%r min_rating=%s matched %d of %d",
        q.search_term, q.category_filter, q.min_rating, len(ordered), len(df),
    )
    return [businesses[pos] for pos in ordered["pos"].tolist()]


def suggest(businesses: Sequence[Business], term: str, limit: int = 6) -> list[Business]:
    """First ``limit`` businesses whose name, address or category contain ``term``."""
    needle = term.strip().lower()
    if not needle or limit <= 0:
        return []
    matches: list[Business] = []
    for b in businesses:
        if (
            needle in b.name.lower()
            or needle in (b.address or "").lower()
            or needle in (b.category or "").lower()
        ):
            matches.append(b)
            if len(matches) >= limit:
                break
    return matches
