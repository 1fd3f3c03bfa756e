from __future__ import annotations

from visa_directory.directory.models import Business, DirectoryQuery, SortField, SortOrder
from visa_directory.directory.search import query, suggest

FIVE = [
    Business(id="1", name="Marina Visa Hub", address="Dubai Marina, Dubai", category="visa services", rating=3.2, review_count=10),
    Business(id="2", name="Capital Migration", address="Abu Dhabi, UAE", category="migration services", rating=4.9, review_count=5),
    Business(id="3", name="Deira Documents", address="Deira, Dubai", category="document clearing", rating=4.8, review_count=40),
    Business(id="4", name="Sharjah Work Visa", address="Sharjah, UAE", category="work visa", rating=2.5, review_count=1),
    Business(id="5", name="Karama Consultants", address="Al Karama, Dubai", category="visa consultants", rating=4.1, review_count=22),
]


def _ids(results):
    return [b.id for b in results]


def test_dubai_search_sorted_by_rating_desc():
    q = DirectoryQuery(search_term="dubai", category_filter="all", min_rating=0, sort_by="rating", sort_order="desc")
    results = query(FIVE, q)
    assert [b.rating for b in results] == [4.8, 4.1, 3.2]


def test_camel_case_query_fields_are_accepted():
    q = DirectoryQuery.model_validate({"searchTerm": "DUBAI", "sortBy": "reviews", "sortOrder": "desc"})
    assert _ids(query(FIVE, q)) == ["3", "5", "1"]


def test_empty_search_term_keeps_everything_in_name_order():
    assert _ids(query(FIVE, DirectoryQuery())) == ["2", "3", "5", "1", "4"]


def test_search_matches_category_and_name():
    assert _ids(query(FIVE, DirectoryQuery(search_term="migration"))) == ["2"]
    assert _ids(query(FIVE, DirectoryQuery(search_term="Documents"))) == ["3"]


def test_category_filter_is_substring_of_category():
    q = DirectoryQuery(category_filter="VISA")
    assert set(_ids(query(FIVE, q))) == {"1", "4", "5"}


def test_min_rating_filter():
    q = DirectoryQuery(min_rating=4.1, sort_by=SortField.rating)
    assert _ids(query(FIVE, q)) == ["5", "3", "2"]


def test_unrated_business_admitted_only_at_zero_threshold():
    unrated = Business(id="u", name="Unrated Visa Office", category="visa services")
    listing = FIVE + [unrated]
    assert "u" in _ids(query(listing, DirectoryQuery(min_rating=0)))
    assert "u" not in _ids(query(listing, DirectoryQuery(min_rating=0.5)))


def test_unrated_sorts_as_zero():
    unrated = Business(id="u", name="Unrated Visa Office", category="visa services")
    results = query(FIVE + [unrated], DirectoryQuery(sort_by="rating", sort_order="asc"))
    assert results[0].id == "u"


def test_sort_is_stable_for_ties_in_both_directions():
    tied = [
        Business(id="t1", name="Zeta", rating=4.0),
        Business(id="t2", name="Alpha", rating=4.0),
        Business(id="t3", name="Mid", rating=4.5),
        Business(id="t4", name="Beta", rating=4.0),
    ]
    asc = query(tied, DirectoryQuery(sort_by="rating", sort_order="asc"))
    desc = query(tied, DirectoryQuery(sort_by="rating", sort_order="desc"))
    assert _ids(asc) == ["t1", "t2", "t4", "t3"]
    assert _ids(desc) == ["t3", "t1", "t2", "t4"]


def test_sort_by_reports_uses_counts_with_missing_as_zero():
    q = DirectoryQuery(sort_by=SortField.reports, sort_order=SortOrder.desc)
    results = query(FIVE, q, report_counts={"4": 3, "2": 1})
    assert _ids(results) == ["4", "2", "1", "3", "5"]


def test_query_is_idempotent():
    q = DirectoryQuery(search_term="a", min_rating=3, sort_by="reviews", sort_order="desc")
    once = query(FIVE, q)
    assert _ids(query(once, q)) == _ids(once)


def test_no_matches_is_empty_list():
    assert query(FIVE, DirectoryQuery(search_term="nowhere-at-all")) == []
    assert query([], DirectoryQuery()) == []


def test_suggest_limits_and_preserves_order():
    assert _ids(suggest(FIVE, "dubai", limit=2)) == ["1", "3"]
    assert suggest(FIVE, "   ") == []
