from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Business(BaseModel):
    """A listed visa/immigration service provider, read-only to the core."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    name: str = "Unknown Business"
    address: str = ""
    category: str = "General Services"
    phone: str | None = None
    website: str | None = None
    email: str | None = None
    rating: float | None = None
    review_count: int = 0
    business_status: str | None = None
    logo_url: str | None = None
    photos: list[str] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None
    has_target_keyword: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value).strip() if value is not None else value

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return "Unknown Business"
        return str(value).strip()

    @field_validator("category", mode="before")
    @classmethod
    def _category_default(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return "General Services"
        return str(value).strip()

    @field_validator("address", mode="before")
    @classmethod
    def _address_to_str(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator(
        "phone", "website", "email", "business_status", "logo_url", "description",
        mode="before",
    )
    @classmethod
    def _empty_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("rating", mode="before")
    @classmethod
    def _clamp_rating(cls, value: Any) -> float | None:
        if value is None or value == "":
            return None
        try:
            rating = float(value)
        except (TypeError, ValueError):
            return None
        return max(0.0, min(5.0, rating))

    @field_validator("review_count", mode="before")
    @classmethod
    def _non_negative_count(cls, value: Any) -> int:
        try:
            return max(0, int(value or 0))
        except (TypeError, ValueError):
            return 0

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate(cls, value: Any) -> float | None:
        try:
            return float(value) if value not in (None, "") else None
        except (TypeError, ValueError):
            return None

    @field_validator("photos", mode="before")
    @classmethod
    def _photo_refs(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        refs: list[str] = []
        for photo in value:
            if isinstance(photo, str) and photo.strip():
                refs.append(photo.strip())
            elif isinstance(photo, dict):
                ref = photo.get("url") or photo.get("photo_reference") or photo.get("photoReference")
                if ref:
                    refs.append(str(ref))
        return refs


class SortField(str, Enum):
    name = "name"
    rating = "rating"
    reviews = "reviews"
    reports = "reports"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class DirectoryQuery(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    search_term: str = Field(default="", max_length=200)
    category_filter: str = Field(default="all", description='Category substring, or "all"')
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    sort_by: SortField = SortField.name
    sort_order: SortOrder = SortOrder.asc


class SearchRequest(DirectoryQuery):
    page: int = Field(default=1, ge=1, description="Number of revealed pages")


class SearchResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    businesses: list[Business]
    total: int
    page: int
    page_size: int
    has_more: bool
    source: str


class Suggestion(BaseModel):
    id: str
    name: str
    category: str
    url: str
