from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..directory.models import Business


class ProfileView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    business: Business
    canonical_url: str
    profile_url: str
    description: str
    services: list[str] = Field(default_factory=list)
    established: str
    license: str
    languages: list[str] = Field(default_factory=list)
    contact_email: str
    contact_website: str
    categories: list[str] = Field(default_factory=list)
    fallback: bool = False
