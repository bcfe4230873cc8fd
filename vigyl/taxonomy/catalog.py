"""Loading the sector/vertical catalog."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from ..config import DEFAULT_TAXONOMY_PATH
from ..models import IndustrySector, IndustryVertical, OpportunityTier

logger = logging.getLogger(__name__)


def parse_vertical(data: dict, sector_name: str) -> IndustryVertical:
    """Build a vertical from its catalog entry."""
    return IndustryVertical(
        id=data["id"],
        name=data["name"],
        sector=data.get("sector") or sector_name,
        keywords=tuple(k.lower() for k in data.get("keywords", [])),
        example_entities=tuple(data.get("example_entities", [])),
        opportunity_tier=OpportunityTier(data.get("opportunity_tier", "medium")),
    )


def parse_taxonomy(data: dict) -> Tuple[IndustrySector, ...]:
    """
    Build sectors from a parsed catalog document.

    Expected shape:
        sectors:
          - id: food-bev
            name: Food & Beverage
            icon: ...
            verticals:
              - {id: ..., name: ..., keywords: [...], example_entities: [...],
                 opportunity_tier: high}
    """
    sectors: List[IndustrySector] = []
    for entry in data.get("sectors", []):
        verticals = tuple(
            parse_vertical(v, entry["name"]) for v in entry.get("verticals", [])
        )
        sectors.append(IndustrySector(
            id=entry["id"],
            name=entry["name"],
            icon=entry.get("icon", ""),
            verticals=verticals,
        ))
    return tuple(sectors)


def load_taxonomy(path: Optional[str] = None) -> Tuple[IndustrySector, ...]:
    """
    Load the catalog from YAML.

    Args:
        path: Catalog file (defaults to the packaged taxonomy)

    Returns:
        Immutable tuple of sectors
    """
    if path is None or Path(path) == DEFAULT_TAXONOMY_PATH:
        return _load_default()
    return _load(Path(path))


@lru_cache(maxsize=1)
def _load_default() -> Tuple[IndustrySector, ...]:
    return _load(DEFAULT_TAXONOMY_PATH)


def _load(path: Path) -> Tuple[IndustrySector, ...]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    sectors = parse_taxonomy(data)
    logger.debug(
        "Loaded taxonomy from %s: %d sectors, %d verticals",
        path,
        len(sectors),
        sum(len(s.verticals) for s in sectors),
    )
    return sectors
