"""In-memory ledger of explored verticals."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..models import ExpandRequest, ExploredVerticalEntry, as_utc, utc_now


class ExploredLedger:
    """Tracks which verticals have been expanded and how many times."""

    def __init__(self, entries: Optional[Iterable[ExploredVerticalEntry]] = None):
        self._entries: Dict[str, ExploredVerticalEntry] = {}
        if entries:
            self.load(entries)

    def load(self, entries: Iterable[ExploredVerticalEntry]) -> None:
        """Seed from stored entries (replaces any existing entry per vertical)."""
        for entry in entries:
            if isinstance(entry, dict):
                entry = ExploredVerticalEntry.from_dict(entry)
            else:
                entry.last_expanded_at = as_utc(entry.last_expanded_at) or utc_now()
            self._entries[entry.vertical_id] = entry

    def record(
        self,
        request: ExpandRequest,
        when: Optional[datetime] = None,
    ) -> ExploredVerticalEntry:
        """Upsert the entry for an expanded vertical, whatever its scope."""
        when = as_utc(when) or utc_now()
        entry = self._entries.get(request.vertical_id)

        if entry is None:
            entry = ExploredVerticalEntry(
                vertical_id=request.vertical_id,
                vertical_name=request.vertical_name,
                sector_name=request.sector_name,
                times_expanded=1,
                last_expanded_at=when,
            )
            self._entries[request.vertical_id] = entry
        else:
            entry.times_expanded += 1
            entry.last_expanded_at = when

        return entry

    def get(self, vertical_id: str) -> Optional[ExploredVerticalEntry]:
        return self._entries.get(vertical_id)

    def times_expanded(self, vertical_id: str) -> int:
        entry = self._entries.get(vertical_id)
        return entry.times_expanded if entry else 0

    def entries(self) -> List[ExploredVerticalEntry]:
        """Entries, most recently expanded first."""
        return sorted(self._entries.values(), key=lambda e: e.last_expanded_at, reverse=True)

    def to_list(self) -> List[dict]:
        return [e.to_dict() for e in self.entries()]

    def __contains__(self, vertical_id: str) -> bool:
        return vertical_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
