"""Pydantic models for API v1."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from vigyl.models import UserLocale


class LocaleModel(BaseModel):
    """Viewer location and local radius."""
    country: str = "US"
    region: str = ""
    city: str = ""
    local_radius: int = Field(default=50, ge=10, le=200)

    def to_locale(self) -> UserLocale:
        return UserLocale(
            country=self.country,
            region=self.region,
            city=self.city,
            local_radius=self.local_radius,
        )


class ClassifyRequest(BaseModel):
    """Stateless classification payload."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "locale": {"country": "US", "region": "GA", "local_radius": 100},
                "prospects": [
                    {
                        "id": "p1",
                        "companyName": "Palmetto Foods",
                        "industryId": "food-service",
                        "location": {"city": "Columbia", "state": "SC", "country": "US"},
                    }
                ],
            }
        }
    )

    locale: LocaleModel = Field(default_factory=LocaleModel)
    prospects: List[dict] = Field(default_factory=list)


class UntappedRequest(BaseModel):
    """Tracked industry names to exclude."""
    tracked: List[str] = Field(default_factory=list)


class ExpansionRequestModel(BaseModel):
    """Expansion request payload."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"vertical_id": "fast-casual-qsr", "scope": "national"}
        }
    )

    vertical_id: str
    scope: Literal["local", "national", "international", "all"] = "all"
    vertical_name: Optional[str] = None
    sector_name: Optional[str] = None
    example_entities: Optional[List[str]] = None


class ProspectListResponse(BaseModel):
    """Classified prospects with per-scope counts."""
    count: int
    counts: dict
    results: List[dict]


class VerticalListResponse(BaseModel):
    count: int
    results: List[dict]
