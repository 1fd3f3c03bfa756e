from __future__ import annotations

import time

from ..analytics.store import record_event
from ..complaints.store import report_counts
from . import cache
from .config import DEFAULT_DIRECTORY_CONFIG, DirectoryConfig
from .data_store import get_directory
from .models import Business, DirectoryQuery, SearchRequest, SearchResponse, SortField
from .pagination import paginate
from .search import query


def _ordered(directory, q: DirectoryQuery) -> tuple[list[Business], bool]:
    """Run the query, reusing cached orderings unless the sort depends on live report counts."""
    if q.sort_by == SortField.reports:
        return query(directory.businesses, q, report_counts()), False

    query_dict = q.model_dump(mode="json")
    ids = cache.lookup(directory.version, query_dict)
    if ids is not None:
        return [directory.by_id[i] for i in ids], True

    results = query(directory.businesses, q)
    cache.store(directory.version, query_dict, [b.id for b in results])
    return results, False


def search_directory(
    request: SearchRequest,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> SearchResponse:
    start_time = time.time()
    directory = get_directory()

    q = DirectoryQuery(**request.model_dump(exclude={"page"}))
    results, cache_hit = _ordered(directory, q)
    page = paginate(results, config.page_size, request.page)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "search_term": q.search_term,
        "category_filter": q.category_filter,
        "min_rating": q.min_rating,
        "sort_by": q.sort_by.value,
        "sort_order": q.sort_order.value,
        "page": request.page,
        "total": page.total,
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })

    return SearchResponse(
        businesses=page.items,
        total=page.total,
        page=page.page_count,
        page_size=page.page_size,
        has_more=page.has_more,
        source=directory.source,
    )
