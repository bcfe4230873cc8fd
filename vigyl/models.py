"""Data models for prospect scope classification and discovery."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Scope(Enum):
    """Geographic scope of a prospect relative to the viewing user."""
    LOCAL = "local"
    NATIONAL = "national"
    INTERNATIONAL = "international"


class OpportunityTier(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RadiusBand(Enum):
    """What a local radius setting means to the user."""
    METRO = "metro"                              # < 50 miles
    EXTENDED_METRO = "extended_metro"            # 50-99
    NEIGHBORING_REGIONS = "neighboring_regions"  # 100-149
    WIDE_REGIONAL = "wide_regional"              # 150+


# Scopes an expansion may be requested for ("all" asks for a mix)
EXPANSION_SCOPES = ("local", "national", "international", "all")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value) -> Optional[datetime]:
    """Parse an ISO timestamp (or datetime) as aware UTC; naive input is taken as UTC."""
    if not value:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def radius_band(radius: int) -> RadiusBand:
    """Describe a local radius setting."""
    if radius < 50:
        return RadiusBand.METRO
    if radius < 100:
        return RadiusBand.EXTENDED_METRO
    if radius < 150:
        return RadiusBand.NEIGHBORING_REGIONS
    return RadiusBand.WIDE_REGIONAL


@dataclass
class Location:
    """Free-text location; region may be a full name or an abbreviation."""

    country: str = ""
    region: str = ""
    city: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Location":
        """Build from a dict using either `region` or `state` for the region."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"location must be an object, got {type(data).__name__}")
        return cls(
            country=data.get("country") or "",
            region=data.get("region") or data.get("state") or "",
            city=data.get("city") or None,
        )

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "region": self.region,
            "city": self.city,
        }


@dataclass
class UserLocale:
    """The viewing user's declared location and local radius (miles)."""

    country: str = "US"
    region: str = ""
    city: str = ""
    local_radius: int = 50

    def __post_init__(self):
        self.local_radius = int(self.local_radius)

    @property
    def band(self) -> RadiusBand:
        return radius_band(self.local_radius)

    @classmethod
    def from_profile(cls, profile: dict, default_radius: int = 50) -> "UserLocale":
        """Build from a business profile row (location_* columns)."""
        radius = profile.get("local_radius")
        return cls(
            country=profile.get("location_country") or "US",
            region=profile.get("location_state") or "",
            city=profile.get("location_city") or "",
            local_radius=radius if radius is not None else default_radius,
        )

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "region": self.region,
            "city": self.city,
            "local_radius": self.local_radius,
        }


# Upstream keys (snake_case and generator camelCase) mapped to record fields
_RECORD_KEYS = {
    "id": "id",
    "company_name": "company_name",
    "companyName": "company_name",
    "industry_id": "industry_id",
    "industryId": "industry_id",
    "industry_name": "industry_name",
    "industryName": "industry_name",
    "score": "score",
    "vigylScore": "score",
    "website_url": "website_url",
    "websiteUrl": "website_url",
    "why_now": "why_now",
    "whyNow": "why_now",
    "employee_count": "employee_count",
    "employeeCount": "employee_count",
    "annual_revenue": "annual_revenue",
    "annualRevenue": "annual_revenue",
    "expanded_from": "expanded_from",
    "_expandedFrom": "expanded_from",
}

# Upstream keys never carried onto the record
_DROPPED_KEYS = {"scope", "location", "expanded_at", "_expandedAt"}


@dataclass
class ProspectRecord:
    """A business prospect. Scope is never stored here; see ClassifiedProspect."""

    id: str
    company_name: str
    industry_id: str = ""
    location: Location = field(default_factory=Location)

    industry_name: Optional[str] = None
    score: Optional[float] = None
    website_url: Optional[str] = None
    why_now: Optional[str] = None
    employee_count: Optional[int] = None
    annual_revenue: Optional[str] = None

    # Expansion provenance
    expanded_from: Optional[str] = None  # Vertical id
    expanded_at: Optional[datetime] = None

    # Anything else upstream sent (contacts, competitors, ...)
    extra: dict = field(default_factory=dict)

    @property
    def is_expanded(self) -> bool:
        return self.expanded_from is not None

    @classmethod
    def from_dict(cls, data: dict) -> "ProspectRecord":
        """
        Build a record from upstream data.

        Accepts snake_case or camelCase keys. Any upstream `scope` value is
        discarded because scope depends on the viewer.
        """
        values: dict = {}
        extra: dict = {}

        for key, value in data.items():
            if key in _RECORD_KEYS:
                values[_RECORD_KEYS[key]] = value
            elif key not in _DROPPED_KEYS:
                extra[key] = value

        expanded_at = as_utc(data.get("expanded_at") or data.get("_expandedAt"))

        return cls(
            id=str(values.pop("id", "") or ""),
            company_name=values.pop("company_name", "") or "",
            location=Location.from_dict(data.get("location")),
            expanded_at=expanded_at,
            extra=extra,
            **values,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "company_name": self.company_name,
            "industry_id": self.industry_id,
            "industry_name": self.industry_name,
            "location": self.location.to_dict(),
            "score": self.score,
            "website_url": self.website_url,
            "why_now": self.why_now,
            "employee_count": self.employee_count,
            "annual_revenue": self.annual_revenue,
            "expanded_from": self.expanded_from,
            "expanded_at": self.expanded_at.isoformat() if self.expanded_at else None,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


@dataclass
class ClassifiedProspect:
    """A record paired with the scope computed for the current viewer."""

    record: ProspectRecord
    scope: Scope

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["scope"] = self.scope.value
        return data


@dataclass(frozen=True)
class IndustryVertical:
    """A narrow industry category within a sector."""

    id: str
    name: str
    sector: str
    keywords: tuple = ()
    example_entities: tuple = ()
    opportunity_tier: OpportunityTier = OpportunityTier.MEDIUM

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sector": self.sector,
            "keywords": list(self.keywords),
            "example_entities": list(self.example_entities),
            "opportunity_tier": self.opportunity_tier.value,
        }


@dataclass(frozen=True)
class IndustrySector:
    """A broad grouping of verticals."""

    id: str
    name: str
    icon: str = ""
    verticals: tuple = ()


@dataclass
class ExploredVerticalEntry:
    """Ledger entry for a vertical the user has expanded."""

    vertical_id: str
    vertical_name: str
    sector_name: str
    times_expanded: int = 1
    last_expanded_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_dict(cls, data: dict) -> "ExploredVerticalEntry":
        last = as_utc(data.get("last_expanded_at"))
        return cls(
            vertical_id=data["vertical_id"],
            vertical_name=data.get("vertical_name", ""),
            sector_name=data.get("sector_name", ""),
            times_expanded=int(data.get("times_expanded", 1)),
            last_expanded_at=last or utc_now(),
        )

    def to_dict(self) -> dict:
        return {
            "vertical_id": self.vertical_id,
            "vertical_name": self.vertical_name,
            "sector_name": self.sector_name,
            "times_expanded": self.times_expanded,
            "last_expanded_at": self.last_expanded_at.isoformat(),
        }


@dataclass
class ExpandRequest:
    """A request to generate more prospects for one vertical."""

    vertical_id: str
    vertical_name: str
    sector_name: str
    scope: str = "all"
    example_entities: list = field(default_factory=list)

    def __post_init__(self):
        if self.scope not in EXPANSION_SCOPES:
            raise ValueError(
                f"Unknown expansion scope '{self.scope}' "
                f"(expected one of: {', '.join(EXPANSION_SCOPES)})"
            )

    @classmethod
    def for_vertical(cls, vertical: IndustryVertical, scope: str = "all") -> "ExpandRequest":
        """Build a request from a catalog vertical."""
        return cls(
            vertical_id=vertical.id,
            vertical_name=vertical.name,
            sector_name=vertical.sector,
            scope=scope,
            example_entities=list(vertical.example_entities),
        )
