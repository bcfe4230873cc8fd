"""Region and country normalization for scope classification."""

from typing import Dict, Iterable, Optional

# US state (and DC) names to postal codes
US_STATE_CODES: Dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "district of columbia": "DC",
    "washington dc": "DC",
    "washington d.c.": "DC",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}


class RegionNormalizer:
    """
    Converts free-text region names to canonical codes.

    Usage:
        normalizer = RegionNormalizer()
        normalizer.normalize("Georgia")  # "GA"
        normalizer.normalize(" ga ")     # "GA"
        normalizer.normalize("Ontario")  # "ONTARIO" (pass-through)
    """

    def __init__(self, names: Optional[Dict[str, str]] = None):
        table = US_STATE_CODES if names is None else names
        self._names = {name.lower().strip(): code.upper() for name, code in table.items()}

    @property
    def codes(self) -> frozenset:
        return frozenset(self._names.values())

    def normalize(self, raw: Optional[str]) -> str:
        """
        Normalize a region name or abbreviation.

        Args:
            raw: Region as entered ("Georgia", "ga", "GA")

        Returns:
            Two-letter code when recognised, otherwise the upper-cased input.
            Unknown regions never raise; they simply match nothing downstream.
        """
        if not raw:
            return ""

        cleaned = raw.strip()
        if len(cleaned) == 2 and cleaned.isalpha():
            return cleaned.upper()

        code = self._names.get(cleaned.lower())
        if code:
            return code

        return cleaned.upper()


_default_normalizer = RegionNormalizer()


def normalize_region(raw: Optional[str]) -> str:
    """Normalize a region with the default US state table."""
    return _default_normalizer.normalize(raw)


def normalize_country(
    raw: Optional[str],
    home_country: str = "US",
    home_aliases: Iterable[str] = (),
) -> str:
    """
    Normalize a country name.

    Any alias of the home country ("USA", "United States") collapses to the
    home code; other values are upper-cased. Empty input stays empty.
    """
    if not raw:
        return ""

    cleaned = raw.strip()
    aliases = {a.strip().lower() for a in home_aliases}
    aliases.add(home_country.strip().lower())

    if cleaned.lower() in aliases:
        return home_country.strip().upper()

    return cleaned.upper()
