from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from visa_directory.app import app
from visa_directory.directory.data_store import set_directory
from visa_directory.directory.models import Business
from visa_directory.sources.loader import LoadResult, NoDataFound

client = TestClient(app)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata():
    body = client.get("/metadata").json()
    assert body["total"] == 6
    assert body["source"] == "fixture"
    assert "work visa" in body["categories"]
    buckets = {b["key"]: b["count"] for b in body["buckets"]}
    assert buckets["work-visa"] == 1
    assert body["page_size"] == 25


# ── Search ───────────────────────────────────────────────────────────────


def test_search_defaults_return_everything_by_name():
    resp = client.post("/search", json={})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 6
    assert body["page"] == 1
    assert body["hasMore"] is False
    names = [b["name"] for b in body["businesses"]]
    assert names == sorted(names, key=str.casefold)


def test_search_dubai_by_rating_desc():
    resp = client.post("/search", json={
        "searchTerm": "dubai", "categoryFilter": "all", "minRating": 0,
        "sortBy": "rating", "sortOrder": "desc",
    })
    body = resp.json()
    assert [b["rating"] for b in body["businesses"]] == [4.8, 4.6, 4.4]
    assert body["businesses"][0]["reviewCount"] == 156


def test_search_accepts_snake_case_fields():
    resp = client.post("/search", json={"search_term": "sharjah", "min_rating": 3.5})
    assert [b["id"] for b in resp.json()["businesses"]] == ["b4"]


def test_search_no_match_is_empty():
    body = client.post("/search", json={"searchTerm": "Nonexistent12345"}).json()
    assert body["total"] == 0
    assert body["businesses"] == []


def test_search_validation_rejects_bad_rating():
    assert client.post("/search", json={"minRating": 6}).status_code == 422


def test_search_validation_rejects_bad_sort_and_page():
    assert client.post("/search", json={"sortBy": "distance"}).status_code == 422
    assert client.post("/search", json={"page": 0}).status_code == 422


def test_search_pages_grow_by_page_size():
    many = [
        Business(id=f"v{i:03d}", name=f"Visa Office {i:03d}", address="Dubai", category="visa services")
        for i in range(60)
    ]
    set_directory(many, source="bulk")

    sizes = [len(client.post("/search", json={"page": p}).json()["businesses"]) for p in (1, 2, 3)]
    assert sizes == [25, 50, 60]

    first = client.post("/search", json={"page": 1}).json()["businesses"]
    second = client.post("/search", json={"page": 2}).json()["businesses"]
    assert second[:25] == first


def test_suggestions():
    resp = client.get("/search/suggestions", params={"q": "dubai", "limit": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert [s["id"] for s in body] == ["b1", "b2"]
    assert body[0]["url"] == "/modern-profile/dubai/dubai-visa-solutions"


def test_category_bucket():
    body = client.get("/categories/immigration").json()
    assert {b["id"] for b in body["businesses"]} == {"b2", "b3"}
    assert client.get("/categories/not-a-bucket").status_code == 404


# ── Profiles ─────────────────────────────────────────────────────────────


def test_company_id_redirects_to_canonical_profile():
    resp = client.get("/company/b3", follow_redirects=False)
    assert resp.status_code == 308
    assert resp.headers["location"] == "/modern-profile/abu-dhabi/capital-migration-services"


def test_company_unknown_id_is_404_with_identifier():
    resp = client.get("/company/does-not-exist")
    assert resp.status_code == 404
    detail = resp.json()["detail"]
    assert detail["identifier"] == "does-not-exist"
    assert detail["browse_url"]


def test_canonical_profile_renders():
    resp = client.get("/modern-profile/dubai/golden-asia-consultants")
    assert resp.status_code == 200
    body = resp.json()
    assert body["business"]["id"] == "b5"
    assert body["canonicalUrl"] == "dubai/golden-asia-consultants"
    assert body["fallback"] is False


def test_legacy_profile_slug_redirects():
    resp = client.get("/modern-profile/dubai/golden-asia", follow_redirects=False)
    assert resp.status_code == 308
    assert resp.headers["location"] == "/modern-profile/dubai/golden-asia-consultants"


def test_mixed_case_profile_slug_redirects():
    resp = client.get("/modern-profile/Dubai/Dubai-Visa-Solutions", follow_redirects=False)
    assert resp.status_code == 308
    assert resp.headers["location"] == "/modern-profile/dubai/dubai-visa-solutions"


def test_redirect_is_followed_to_profile():
    resp = client.get("/company/b5")
    assert resp.status_code == 200
    assert resp.json()["business"]["name"] == "Golden Asia Consultants"


def test_profile_on_empty_directory_is_404():
    set_directory([], source="none")
    resp = client.get("/modern-profile/dubai/anything")
    assert resp.status_code == 404
    assert resp.json()["detail"]["identifier"] == "dubai/anything"


# ── Reviews ──────────────────────────────────────────────────────────────


def test_reviews_are_synthesised_and_stable():
    first = client.get("/businesses/b1/reviews").json()
    second = client.get("/businesses/b1/reviews").json()
    assert first == second
    assert first["synthetic"] is True
    assert len(first["reviews"]) == 156
    assert first["summary"]["total"] == 156


def test_reviews_floor_and_limit():
    body = client.get("/businesses/b6/reviews", params={"limit": 10}).json()
    assert len(body["reviews"]) == 10
    assert body["summary"]["total"] == 50


def test_reviews_unknown_business():
    assert client.get("/businesses/nope/reviews").status_code == 404


# ── Directory loading ────────────────────────────────────────────────────


@patch("visa_directory.directory.data_store.load")
def test_refresh_reloads_from_sources(mock_load):
    mock_load.return_value = LoadResult(
        businesses=[
            Business(id="n1", name="New Visa Centre", category="visa services"),
            Business(id="n2", name="Gulf Coffee House", category="Cafe"),
        ],
        source="http://example.test/api/businesses",
    )
    body = client.post("/directory/refresh").json()
    assert body == {"status": "reloaded", "total": 1, "source": "http://example.test/api/businesses"}


@patch("visa_directory.directory.data_store.load", side_effect=NoDataFound(["a", "b"]))
def test_refresh_with_no_data_serves_empty_directory(mock_load):
    body = client.post("/directory/refresh").json()
    assert body["total"] == 0
    assert body["source"] == "none"
    assert client.post("/search", json={}).json()["businesses"] == []
