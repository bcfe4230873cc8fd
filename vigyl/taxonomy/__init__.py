"""Industry taxonomy catalog and index."""

from .catalog import load_taxonomy, parse_taxonomy
from .index import IndustryTaxonomyIndex

__all__ = [
    "load_taxonomy",
    "parse_taxonomy",
    "IndustryTaxonomyIndex",
]
