"""Scope classification - is this prospect local, national or international?"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from ..config import HOME_COUNTRY_ALIASES
from ..models import ClassifiedProspect, Location, ProspectRecord, Scope, UserLocale
from .adjacency import StateAdjacency
from .regions import RegionNormalizer, normalize_country

logger = logging.getLogger(__name__)


class ScopeClassifier:
    """
    Labels prospects relative to the viewing user's location and radius.

    Scope is always derived from geography on every call; any scope that
    arrived with upstream data is ignored.

    Usage:
        classifier = ScopeClassifier()
        locale = UserLocale(country="US", region="GA", local_radius=100)
        classifier.classify(record, locale)  # Scope.LOCAL for a record in SC
    """

    def __init__(
        self,
        adjacency: Optional[StateAdjacency] = None,
        normalizer: Optional[RegionNormalizer] = None,
        home_country: str = "US",
        home_aliases: Iterable[str] = HOME_COUNTRY_ALIASES,
        adjacency_radius: int = 100,
    ):
        self.adjacency = adjacency or StateAdjacency()
        self.normalizer = normalizer or RegionNormalizer()
        self.home_country = home_country.strip().upper()
        self.home_aliases = tuple(home_aliases)
        self.adjacency_radius = adjacency_radius

    def _country(self, raw: Optional[str]) -> str:
        """Normalized country; empty means the home country."""
        country = normalize_country(raw, self.home_country, self.home_aliases)
        return country or self.home_country

    def classify(
        self,
        target: Union[ProspectRecord, Location],
        locale: UserLocale,
    ) -> Scope:
        """
        Classify a record (or bare location) for a user.

        Args:
            target: Prospect record or its location
            locale: Viewing user's country, region and local radius

        Returns:
            Scope.LOCAL, Scope.NATIONAL or Scope.INTERNATIONAL
        """
        location = target.location if isinstance(target, ProspectRecord) else target

        user_country = self._country(locale.country)
        record_country = self._country(location.country)
        user_domestic = user_country == self.home_country
        record_domestic = record_country == self.home_country

        if user_domestic and not record_domestic:
            return Scope.INTERNATIONAL

        if user_domestic and record_domestic:
            user_region = self.normalizer.normalize(locale.region)
            record_region = self.normalizer.normalize(location.region)

            if user_region == record_region:
                return Scope.LOCAL
            if (
                locale.local_radius >= self.adjacency_radius
                and self.adjacency.are_adjacent(user_region, record_region)
            ):
                return Scope.LOCAL
            return Scope.NATIONAL

        # Same foreign country: compare regions without the adjacency table
        if user_country == record_country:
            if self.normalizer.normalize(locale.region) == self.normalizer.normalize(location.region):
                return Scope.LOCAL
            return Scope.NATIONAL

        return Scope.INTERNATIONAL

    def classify_all(
        self,
        records: Iterable[ProspectRecord],
        locale: UserLocale,
    ) -> List[ClassifiedProspect]:
        """Classify every record, preserving order."""
        return [ClassifiedProspect(record=r, scope=self.classify(r, locale)) for r in records]


def scope_counts(classified: Iterable[ClassifiedProspect]) -> Dict[str, int]:
    """Count classified prospects per scope (all scopes present)."""
    counts = {scope.value: 0 for scope in Scope}
    for item in classified:
        counts[item.scope.value] += 1
    return counts


def group_by_scope(classified: Iterable[ClassifiedProspect]) -> Dict[Scope, List[ClassifiedProspect]]:
    """Group classified prospects by scope, in Scope order."""
    groups: Dict[Scope, List[ClassifiedProspect]] = {scope: [] for scope in Scope}
    for item in classified:
        groups[item.scope].append(item)
    return groups


def filter_by_scope(
    classified: Iterable[ClassifiedProspect],
    scope: Optional[Union[Scope, str]],
) -> List[ClassifiedProspect]:
    """Keep prospects in one scope; None or "all" keeps everything."""
    if scope is None or scope == "all":
        return list(classified)
    wanted = scope if isinstance(scope, Scope) else Scope(scope)
    return [item for item in classified if item.scope == wanted]
