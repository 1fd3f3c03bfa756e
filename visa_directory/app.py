from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import RedirectResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .complaints.models import (
    CompanyComplaints,
    ComplaintRequest,
    ComplaintStatus,
    ComplaintSubmitted,
)
from .complaints.store import (
    ComplaintNotFound,
    approved_for,
    set_status,
    submit_complaint,
)
from .directory.browse import search_directory
from .directory.cache import get_cache_stats
from .directory.categories import DEFAULT_BUCKETS, category_labels, classify_all
from .directory.config import DEFAULT_DIRECTORY_CONFIG
from .directory.data_store import get_directory, refresh_directory
from .directory.models import Business, SearchRequest, SearchResponse, Suggestion
from .directory.pagination import paginate
from .directory.search import suggest
from .profiles.models import ProfileView
from .profiles.resolver import (
    IdIdentifier,
    ProfileNotFound,
    SlugIdentifier,
    enrich_profile,
    resolve,
)
from .profiles.slugs import profile_path
from .reviews.models import ReviewsResponse
from .reviews.synthesizer import get_reviews, rating_summary

app = FastAPI(title="Visa Directory API", version="1.0.0")

BROWSE_URL = "/fraud-immigration-consultants"


def _not_found(exc: ProfileNotFound) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "message": str(exc),
            "identifier": str(exc.identifier),
            "browse_url": BROWSE_URL,
        },
    )


def _business_or_404(business_id: str) -> Business:
    directory = get_directory()
    try:
        return resolve(directory.businesses, IdIdentifier(business_id), directory.by_id).business
    except ProfileNotFound as exc:
        raise _not_found(exc) from exc


# ── Directory ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    directory = get_directory()
    buckets = classify_all(directory.businesses, DEFAULT_BUCKETS)
    return {
        "total": len(directory.businesses),
        "source": directory.source,
        "categories": category_labels(directory.businesses),
        "buckets": [{"key": key, "count": len(members)} for key, members in buckets.items()],
        "page_size": DEFAULT_DIRECTORY_CONFIG.page_size,
    }


@app.post("/search", response_model=SearchResponse)
def search(body: SearchRequest) -> SearchResponse:
    return search_directory(body)


@app.get("/search/suggestions", response_model=list[Suggestion])
def suggestions(
    q: str = Query(default="", max_length=200),
    limit: int = Query(default=DEFAULT_DIRECTORY_CONFIG.suggestion_limit, ge=1, le=20),
) -> list[Suggestion]:
    directory = get_directory()
    return [
        Suggestion(id=b.id, name=b.name, category=b.category, url=profile_path(b))
        for b in suggest(directory.businesses, q, limit)
    ]


@app.get("/categories/{bucket}", response_model=SearchResponse)
def category_bucket(bucket: str, page: int = Query(default=1, ge=1)) -> SearchResponse:
    if bucket not in DEFAULT_BUCKETS:
        raise HTTPException(status_code=404, detail=f"Unknown category bucket: {bucket}")
    directory = get_directory()
    members = classify_all(directory.businesses, {bucket: DEFAULT_BUCKETS[bucket]})[bucket]
    result = paginate(members, DEFAULT_DIRECTORY_CONFIG.page_size, page)
    return SearchResponse(
        businesses=result.items,
        total=result.total,
        page=result.page_count,
        page_size=result.page_size,
        has_more=result.has_more,
        source=directory.source,
    )


@app.post("/directory/refresh")
def directory_refresh() -> dict:
    directory = refresh_directory()
    return {"status": "reloaded", "total": len(directory.businesses), "source": directory.source}


# ── Profiles ─────────────────────────────────────────────────────────────


@app.get("/company/{business_id}")
def company_redirect(business_id: str) -> RedirectResponse:
    business = _business_or_404(business_id)
    return RedirectResponse(url=profile_path(business), status_code=308)


@app.get("/modern-profile/{location}/{name}", response_model=ProfileView)
def modern_profile(location: str, name: str):
    identifier = SlugIdentifier(location, name)
    directory = get_directory()
    try:
        resolved = resolve(directory.businesses, identifier, directory.by_id)
    except ProfileNotFound as exc:
        raise _not_found(exc) from exc

    if not resolved.matches(identifier):
        return RedirectResponse(url=profile_path(resolved.business), status_code=308)

    record_event("profile_view", {"business_id": resolved.business.id})
    return enrich_profile(resolved)


@app.get("/businesses/{business_id}/reviews", response_model=ReviewsResponse)
def business_reviews(
    business_id: str,
    limit: int | None = Query(default=None, ge=1),
) -> ReviewsResponse:
    business = _business_or_404(business_id)
    reviews = get_reviews(business)
    return ReviewsResponse(
        business_id=business.id,
        synthetic=all(r.synthetic for r in reviews),
        summary=rating_summary(reviews),
        reviews=reviews[:limit] if limit else reviews,
    )


# ── Complaints ───────────────────────────────────────────────────────────


@app.post("/complaints", response_model=ComplaintSubmitted)
def file_complaint(body: ComplaintRequest) -> ComplaintSubmitted:
    _business_or_404(body.company_id)
    report = submit_complaint(body)
    record_event("complaint", {"business_id": body.company_id, "report_type": body.report_type.value})
    return ComplaintSubmitted(report_id=report.id, status=report.status)


@app.get("/businesses/{business_id}/complaints", response_model=CompanyComplaints)
def business_complaints(business_id: str) -> CompanyComplaints:
    reports = approved_for(business_id)
    return CompanyComplaints(company_id=business_id, total_reports=len(reports), reports=reports)


def _moderate(report_id: str, status: ComplaintStatus) -> dict:
    try:
        report = set_status(report_id, status)
    except ComplaintNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"report_id": report.id, "status": report.status.value}


@app.post("/complaints/{report_id}/approve")
def approve_complaint(report_id: str) -> dict:
    return _moderate(report_id, ComplaintStatus.approved)


@app.post("/complaints/{report_id}/reject")
def reject_complaint(report_id: str) -> dict:
    return _moderate(report_id, ComplaintStatus.rejected)


# ── Usage ────────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
