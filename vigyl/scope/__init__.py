"""Geographic scope classification."""

from .regions import RegionNormalizer, normalize_region, normalize_country, US_STATE_CODES
from .adjacency import StateAdjacency, US_STATE_NEIGHBORS
from .classifier import ScopeClassifier, scope_counts, group_by_scope, filter_by_scope

__all__ = [
    "RegionNormalizer",
    "normalize_region",
    "normalize_country",
    "US_STATE_CODES",
    "StateAdjacency",
    "US_STATE_NEIGHBORS",
    "ScopeClassifier",
    "scope_counts",
    "group_by_scope",
    "filter_by_scope",
]
