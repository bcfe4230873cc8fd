"""Query operations over the industry taxonomy."""

from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..models import IndustrySector, IndustryVertical, OpportunityTier
from .catalog import load_taxonomy


class IndustryTaxonomyIndex:
    """
    Flattened, searchable view of the sector -> vertical catalog.

    Usage:
        index = IndustryTaxonomyIndex()          # packaged catalog
        index.search("qsr")                      # keyword match
        index.untapped(["Healthcare IT"])        # verticals not yet tracked
        index.sector_summary()                   # counts for browsing
    """

    def __init__(self, sectors: Optional[Sequence[IndustrySector]] = None):
        self.sectors = tuple(load_taxonomy() if sectors is None else sectors)
        self.verticals = tuple(v for s in self.sectors for v in s.verticals)
        self._by_id = MappingProxyType({v.id: v for v in self.verticals})
        self._sectors_by_id = MappingProxyType({s.id: s for s in self.sectors})

    @classmethod
    def from_file(cls, path: str) -> "IndustryTaxonomyIndex":
        return cls(load_taxonomy(path))

    @property
    def vertical_map(self) -> Dict[str, IndustryVertical]:
        return self._by_id

    def get(self, vertical_id: str) -> Optional[IndustryVertical]:
        return self._by_id.get(vertical_id)

    def sector(self, sector_id: str) -> Optional[IndustrySector]:
        return self._sectors_by_id.get(sector_id)

    def search(self, query: str) -> List[IndustryVertical]:
        """
        Find verticals matching free text.

        Case-insensitive substring match against the vertical name, its
        sector name, every keyword and every example entity. Results keep
        catalog order.
        """
        q = (query or "").strip().lower()
        if not q:
            return list(self.verticals)

        return [
            v for v in self.verticals
            if q in v.name.lower()
            or q in v.sector.lower()
            or any(q in k.lower() for k in v.keywords)
            or any(q in e.lower() for e in v.example_entities)
        ]

    def untapped(self, tracked_names: Iterable[str]) -> List[IndustryVertical]:
        """
        Verticals not covered by the user's tracked industries.

        A vertical is covered when its name and any tracked name contain one
        another (either direction, case-insensitive).
        """
        # TODO: short tracked names like "AI" hide unrelated verticals via
        # substring containment; consider word-boundary matching.
        tracked = [t.strip().lower() for t in tracked_names if t and t.strip()]

        return [
            v for v in self.verticals
            if not any(t in v.name.lower() or v.name.lower() in t for t in tracked)
        ]

    def sector_summary(self) -> List[Dict[str, Union[str, int]]]:
        """Vertical and example-entity counts per sector."""
        return [
            {
                "id": s.id,
                "name": s.name,
                "icon": s.icon,
                "vertical_count": len(s.verticals),
                "company_count": sum(len(v.example_entities) for v in s.verticals),
            }
            for s in self.sectors
        ]

    def all_companies(self) -> List[str]:
        """Unique example entities across the catalog, sorted."""
        return sorted({e for v in self.verticals for e in v.example_entities})

    def by_tier(self, tier: Union[OpportunityTier, str]) -> List[IndustryVertical]:
        wanted = tier if isinstance(tier, OpportunityTier) else OpportunityTier(tier)
        return [v for v in self.verticals if v.opportunity_tier == wanted]

    def high_opportunity(self) -> List[IndustryVertical]:
        return self.by_tier(OpportunityTier.HIGH)

    def __len__(self) -> int:
        return len(self.verticals)

    def __contains__(self, vertical_id: str) -> bool:
        return vertical_id in self._by_id
