"""State adjacency table used to widen "local" to neighbouring states."""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

# Land borders between US states (and DC). Four Corners point contacts
# (AZ-CO, NM-UT) are not treated as neighbours. AK and HI have none.
US_STATE_NEIGHBORS: Dict[str, Tuple[str, ...]] = {
    "AK": (),
    "AL": ("FL", "GA", "MS", "TN"),
    "AR": ("LA", "MO", "MS", "OK", "TN", "TX"),
    "AZ": ("CA", "NM", "NV", "UT"),
    "CA": ("AZ", "NV", "OR"),
    "CO": ("KS", "NE", "NM", "OK", "UT", "WY"),
    "CT": ("MA", "NY", "RI"),
    "DC": ("MD", "VA"),
    "DE": ("MD", "NJ", "PA"),
    "FL": ("AL", "GA"),
    "GA": ("AL", "FL", "NC", "SC", "TN"),
    "HI": (),
    "IA": ("IL", "MN", "MO", "NE", "SD", "WI"),
    "ID": ("MT", "NV", "OR", "UT", "WA", "WY"),
    "IL": ("IA", "IN", "KY", "MO", "WI"),
    "IN": ("IL", "KY", "MI", "OH"),
    "KS": ("CO", "MO", "NE", "OK"),
    "KY": ("IL", "IN", "MO", "OH", "TN", "VA", "WV"),
    "LA": ("AR", "MS", "TX"),
    "MA": ("CT", "NH", "NY", "RI", "VT"),
    "MD": ("DC", "DE", "PA", "VA", "WV"),
    "ME": ("NH",),
    "MI": ("IN", "OH", "WI"),
    "MN": ("IA", "ND", "SD", "WI"),
    "MO": ("AR", "IA", "IL", "KS", "KY", "NE", "OK", "TN"),
    "MS": ("AL", "AR", "LA", "TN"),
    "MT": ("ID", "ND", "SD", "WY"),
    "NC": ("GA", "SC", "TN", "VA"),
    "ND": ("MN", "MT", "SD"),
    "NE": ("CO", "IA", "KS", "MO", "SD", "WY"),
    "NH": ("MA", "ME", "VT"),
    "NJ": ("DE", "NY", "PA"),
    "NM": ("AZ", "CO", "OK", "TX"),
    "NV": ("AZ", "CA", "ID", "OR", "UT"),
    "NY": ("CT", "MA", "NJ", "PA", "VT"),
    "OH": ("IN", "KY", "MI", "PA", "WV"),
    "OK": ("AR", "CO", "KS", "MO", "NM", "TX"),
    "OR": ("CA", "ID", "NV", "WA"),
    "PA": ("DE", "MD", "NJ", "NY", "OH", "WV"),
    "RI": ("CT", "MA"),
    "SC": ("GA", "NC"),
    "SD": ("IA", "MN", "MT", "ND", "NE", "WY"),
    "TN": ("AL", "AR", "GA", "KY", "MO", "MS", "NC", "VA"),
    "TX": ("AR", "LA", "NM", "OK"),
    "UT": ("AZ", "CO", "ID", "NV", "WY"),
    "VA": ("DC", "KY", "MD", "NC", "TN", "WV"),
    "VT": ("MA", "NH", "NY"),
    "WA": ("ID", "OR"),
    "WI": ("IA", "IL", "MI", "MN"),
    "WV": ("KY", "MD", "OH", "PA", "VA"),
    "WY": ("CO", "ID", "MT", "NE", "SD", "UT"),
}


class StateAdjacency:
    """
    Immutable region-code adjacency lookup.

    Lookups are keyed by the first code only, so the table should be kept
    symmetric; `asymmetries()` reports entries that are not.
    """

    def __init__(self, table: Optional[Mapping[str, Iterable[str]]] = None):
        source = US_STATE_NEIGHBORS if table is None else table
        self._table = MappingProxyType({
            code.upper(): frozenset(n.upper() for n in neighbors)
            for code, neighbors in source.items()
        })

    @property
    def codes(self) -> frozenset:
        return frozenset(self._table)

    def neighbors(self, code: str) -> frozenset:
        """Neighbouring codes for a region (empty when unknown)."""
        return self._table.get(code.upper(), frozenset())

    def are_adjacent(self, origin: str, other: str) -> bool:
        """True if `other` is listed as a neighbour of `origin`."""
        return other.upper() in self.neighbors(origin)

    def asymmetries(self) -> List[Tuple[str, str]]:
        """Pairs (a, b) where b neighbours a but a does not neighbour b."""
        missing = []
        for code, neighbors in sorted(self._table.items()):
            for other in sorted(neighbors):
                if code not in self._table.get(other, frozenset()):
                    missing.append((code, other))
        return missing

    def is_symmetric(self) -> bool:
        return not self.asymmetries()

    def __contains__(self, code: str) -> bool:
        return code.upper() in self._table

    def __len__(self) -> int:
        return len(self._table)
