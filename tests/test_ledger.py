"""Tests for the explored-vertical ledger."""

from datetime import datetime, timedelta, timezone

from vigyl.expansion import ExploredLedger
from vigyl.models import ExpandRequest, ExploredVerticalEntry


def make_request(vertical_id="cybersecurity", scope="all"):
    return ExpandRequest(
        vertical_id=vertical_id,
        vertical_name=vertical_id.title(),
        sector_name="Technology & SaaS",
        scope=scope,
    )


class TestExploredLedger:
    """Test ledger upserts and ordering."""

    def test_first_expansion_creates_entry(self):
        """First expansion creates an entry with count 1."""
        ledger = ExploredLedger()
        entry = ledger.record(make_request())

        assert entry.times_expanded == 1
        assert entry.vertical_name == "Cybersecurity"
        assert "cybersecurity" in ledger
        assert len(ledger) == 1

    def test_repeat_increments_regardless_of_scope(self):
        """Later expansions in any scope increment the same entry."""
        ledger = ExploredLedger()
        t0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        ledger.record(make_request(scope="local"), when=t0)
        entry = ledger.record(make_request(scope="international"), when=t0 + timedelta(hours=1))

        assert len(ledger) == 1
        assert entry.times_expanded == 2
        assert entry.last_expanded_at == t0 + timedelta(hours=1)
        assert ledger.times_expanded("cybersecurity") == 2

    def test_unknown_vertical(self):
        """Unexplored verticals report zero."""
        ledger = ExploredLedger()
        assert ledger.times_expanded("gaming") == 0
        assert ledger.get("gaming") is None

    def test_entries_newest_first(self):
        """Entries are ordered by last expansion, newest first."""
        ledger = ExploredLedger()
        t0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
        ledger.record(make_request("gaming"), when=t0)
        ledger.record(make_request("streaming"), when=t0 + timedelta(minutes=5))
        ledger.record(make_request("gaming"), when=t0 + timedelta(minutes=10))

        assert [e.vertical_id for e in ledger.entries()] == ["gaming", "streaming"]

    def test_load_and_serialize(self):
        """Stored entries round through to_list and load."""
        ledger = ExploredLedger()
        ledger.record(make_request("gaming"), when=datetime(2026, 2, 3, 4, 5))
        stored = ledger.to_list()

        assert stored[0]["last_expanded_at"] == "2026-02-03T04:05:00+00:00"

        restored = ExploredLedger()
        restored.load(stored)
        assert restored.get("gaming") == ExploredVerticalEntry.from_dict(stored[0])
        assert restored.times_expanded("gaming") == 1

    def test_naive_time_taken_as_utc(self):
        """Naive timestamps are stored as UTC."""
        ledger = ExploredLedger()
        entry = ledger.record(make_request(), when=datetime(2026, 1, 1, 9, 30))
        assert entry.last_expanded_at == datetime(2026, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_stored_utc_entries_mix_with_new(self):
        """Entries stored with a Z suffix sort alongside fresh expansions."""
        ledger = ExploredLedger([
            {
                "vertical_id": "gaming",
                "vertical_name": "Gaming",
                "sector_name": "Media & Entertainment",
                "times_expanded": 2,
                "last_expanded_at": "2026-03-01T10:00:00.000Z",
            },
            ExploredVerticalEntry("streaming", "Streaming", "Media & Entertainment",
                                  last_expanded_at=datetime(2026, 3, 2)),
        ])
        ledger.record(make_request("cybersecurity"), when=datetime(2026, 3, 5, tzinfo=timezone.utc))

        assert [e.vertical_id for e in ledger.entries()] == ["cybersecurity", "streaming", "gaming"]
        assert ledger.to_list()[2]["last_expanded_at"] == "2026-03-01T10:00:00+00:00"
