from __future__ import annotations

import pytest

from visa_directory.analytics.store import clear_events
from visa_directory.complaints.store import clear_complaints
from visa_directory.directory.cache import clear_cache
from visa_directory.directory.data_store import clear_directory, set_directory
from visa_directory.directory.models import Business
from visa_directory.reviews.synthesizer import clear_authoritative_reviews


def make_business(id: str, name: str, address: str = "", category: str = "visa services", **kwargs) -> Business:
    return Business(id=id, name=name, address=address, category=category, **kwargs)


SAMPLE_BUSINESSES = [
    make_business("b1", "Dubai Visa Solutions", "Business Bay, Dubai, UAE", "Visa Services", rating=4.8, review_count=156),
    make_business("b2", "Emirates Immigration Consultants", "DIFC, Dubai, UAE", "Immigration Services", rating=4.6, review_count=89),
    make_business("b3", "Capital Migration Services", "Hamdan Street, Abu Dhabi, UAE", "migration services", rating=4.1, review_count=41),
    make_business("b4", "Sharjah Work Visa Centre", "Al Majaz 2, Sharjah, UAE", "work visa", rating=3.9, review_count=27),
    make_business("b5", "Golden Asia Consultants", "Al Karama, Dubai, UAE", "visa consultants", rating=4.4, review_count=97),
    make_business("b6", "Ajman Overseas Consultants", "Al Nuaimiya, Ajman, UAE", "overseas consultants", review_count=0),
]


@pytest.fixture(autouse=True)
def _reset_state():
    clear_cache()
    clear_events()
    clear_complaints()
    clear_authoritative_reviews()
    set_directory(SAMPLE_BUSINESSES, source="fixture")
    yield
    clear_directory()


@pytest.fixture
def businesses() -> list[Business]:
    return list(SAMPLE_BUSINESSES)
