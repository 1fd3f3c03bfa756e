from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Review(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    author_name: str
    rating: int = Field(..., ge=1, le=5)
    text: str
    relative_age: str
    avatar_ref: str | None = None
    synthetic: bool = True


class RatingSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    average: float
    total: int
    histogram: dict[int, int]


class ReviewsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    business_id: str
    synthetic: bool
    summary: RatingSummary
    reviews: list[Review]
