from __future__ import annotations

from collections import Counter
from typing import Any

from ..complaints.models import ComplaintStatus
from ..complaints.store import get_complaints


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    views = [e for e in events if e["type"] == "profile_view"]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    term_counter: Counter[str] = Counter()
    category_counter: Counter[str] = Counter()
    sort_counter: Counter[str] = Counter()
    for s in searches:
        term = (s.get("search_term") or "").strip().lower()
        if term:
            term_counter[term] += 1
        category = s.get("category_filter") or "all"
        if category != "all":
            category_counter[category] += 1
        sort_counter[f"{s.get('sort_by', 'name')}:{s.get('sort_order', 'asc')}"] += 1

    filter_counts = {"search_term": 0, "category": 0, "rating": 0}
    for s in searches:
        if s.get("search_term"):
            filter_counts["search_term"] += 1
        if (s.get("category_filter") or "all") != "all":
            filter_counts["category"] += 1
        if s.get("min_rating", 0) > 0:
            filter_counts["rating"] += 1
    filter_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in filter_counts.items()
    }

    zero_results = sum(1 for s in searches if s.get("total") == 0)
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))

    view_counter: Counter[str] = Counter(v.get("business_id", "unknown") for v in views)

    complaints = get_complaints()
    status_counter = Counter(c.status for c in complaints)

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "zero_result_searches": zero_results,
        "top_search_terms": _top(term_counter),
        "top_categories": _top(category_counter),
        "sort_usage": dict(sort_counter),
        "filter_usage": filter_usage,
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
        "profile_views": len(views),
        "top_profiles": _top(view_counter),
        "complaints_summary": {
            "total": len(complaints),
            "pending": status_counter.get(ComplaintStatus.pending, 0),
            "approved": status_counter.get(ComplaintStatus.approved, 0),
            "rejected": status_counter.get(ComplaintStatus.rejected, 0),
        },
    }
