"""Tests for region normalization and state adjacency."""

import pytest

from vigyl.scope import (
    RegionNormalizer,
    StateAdjacency,
    US_STATE_CODES,
    US_STATE_NEIGHBORS,
    normalize_country,
    normalize_region,
)


class TestRegionNormalizer:
    """Test free-text region normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("Georgia", "GA"),
        ("georgia", "GA"),
        ("  South Carolina ", "SC"),
        ("GA", "GA"),
        ("ga", "GA"),
        (" tx ", "TX"),
        ("District of Columbia", "DC"),
        ("Washington DC", "DC"),
        ("Washington", "WA"),
        ("Ontario", "ONTARIO"),  # Unknown names pass through upper-cased
        ("Île-de-France", "ÎLE-DE-FRANCE"),
    ])
    def test_normalize(self, raw, expected):
        """Names and abbreviations map to two-letter codes."""
        assert RegionNormalizer().normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input(self, raw):
        """Empty input yields an empty code."""
        assert normalize_region(raw) == ""

    def test_unknown_two_letters_pass_through(self):
        """Any two-letter input is treated as a code."""
        assert normalize_region("zz") == "ZZ"

    def test_covers_all_states(self):
        """Default table covers 50 states plus DC."""
        assert len(RegionNormalizer().codes) == 51
        assert set(US_STATE_CODES.values()) == set(US_STATE_NEIGHBORS)

    def test_custom_table(self):
        """A custom name table replaces the US one."""
        normalizer = RegionNormalizer({"Queensland": "QLD", "New South Wales": "NSW"})
        assert normalizer.normalize("queensland") == "QLD"
        assert normalizer.normalize("Georgia") == "GEORGIA"


class TestNormalizeCountry:
    """Test home-country alias handling."""

    @pytest.mark.parametrize("raw", ["US", "us", "USA", "United States", "united states of america"])
    def test_home_aliases(self, raw):
        """Every home alias collapses to the home code."""
        assert normalize_country(raw, "US", ["US", "USA", "United States", "United States of America"]) == "US"

    def test_foreign_country_upper_cased(self):
        """Other countries are upper-cased."""
        assert normalize_country(" France ", "US") == "FRANCE"

    def test_empty(self):
        """Empty input stays empty."""
        assert normalize_country("", "US") == ""
        assert normalize_country(None, "US") == ""


class TestStateAdjacency:
    """Test the state neighbor table."""

    def test_symmetric(self):
        """If A borders B then B borders A."""
        adjacency = StateAdjacency()
        assert adjacency.is_symmetric()
        assert adjacency.asymmetries() == []

    def test_every_pair_symmetric(self):
        """Walk the raw table for symmetry."""
        for code, neighbors in US_STATE_NEIGHBORS.items():
            for other in neighbors:
                assert code in US_STATE_NEIGHBORS[other], f"{other} missing {code}"

    def test_no_self_loops(self):
        """No state neighbors itself."""
        adjacency = StateAdjacency()
        for code in adjacency.codes:
            assert code not in adjacency.neighbors(code)

    @pytest.mark.parametrize("code,expected", [
        ("GA", {"AL", "FL", "NC", "SC", "TN"}),
        ("CA", {"AZ", "NV", "OR"}),
        ("AK", set()),
        ("HI", set()),
    ])
    def test_neighbors(self, code, expected):
        """Known neighbor sets."""
        assert StateAdjacency().neighbors(code) == frozenset(expected)

    def test_four_corners_not_adjacent(self):
        """Point contacts do not count as borders."""
        adjacency = StateAdjacency()
        assert not adjacency.are_adjacent("AZ", "CO")
        assert not adjacency.are_adjacent("UT", "NM")

    def test_unknown_code(self):
        """Unknown codes have no neighbors."""
        adjacency = StateAdjacency()
        assert adjacency.neighbors("ONTARIO") == frozenset()
        assert not adjacency.are_adjacent("ONTARIO", "NY")
        assert "ONTARIO" not in adjacency

    def test_asymmetric_table_reported(self):
        """A one-sided custom table is detected."""
        adjacency = StateAdjacency({"AA": ["BB"], "BB": []})
        assert not adjacency.is_symmetric()
        assert adjacency.asymmetries() == [("AA", "BB")]
