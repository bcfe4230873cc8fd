"""
VIGYL prospect core - geographic scope classification and taxonomy-driven
prospect discovery.

Label prospects as local, national or international relative to the viewer,
browse the industry taxonomy for untapped verticals, and expand the working
prospect set one vertical at a time.

CLI Usage:
    vigyl classify prospects.json --region GA --radius 100
    vigyl taxonomy untapped --tracked "Healthcare IT" --tracked "FinTech"
    vigyl expand fast-casual-qsr --scope national --region GA
    vigyl web  # Start the JSON API

Library Usage:
    from vigyl import ScopeClassifier, UserLocale, IndustryTaxonomyIndex

    classifier = ScopeClassifier()
    locale = UserLocale(country="US", region="GA", local_radius=100)

    for item in classifier.classify_all(records, locale):
        print(f"{item.record.company_name}: {item.scope.value}")
"""

__version__ = "0.3.0"
__author__ = "VIGYL"

# Semantic versioning
# MAJOR.MINOR.PATCH
# - MAJOR: Breaking changes
# - MINOR: New features (backward compatible)
# - PATCH: Bug fixes (backward compatible)
VERSION_INFO = {
    "major": 0,
    "minor": 3,
    "patch": 0,
    "release": "beta",  # stable, beta, alpha
}


def get_version() -> str:
    """Get full version string."""
    version = f"{VERSION_INFO['major']}.{VERSION_INFO['minor']}.{VERSION_INFO['patch']}"
    if VERSION_INFO["release"] != "stable":
        version += f"-{VERSION_INFO['release']}"
    return version


from vigyl.models import (
    Scope,
    Location,
    UserLocale,
    ProspectRecord,
    ClassifiedProspect,
    ExpandRequest,
)
from vigyl.scope import ScopeClassifier
from vigyl.taxonomy import IndustryTaxonomyIndex
from vigyl.expansion import ExpansionOrchestrator, ExpansionError

__all__ = [
    "Scope",
    "Location",
    "UserLocale",
    "ProspectRecord",
    "ClassifiedProspect",
    "ExpandRequest",
    "ScopeClassifier",
    "IndustryTaxonomyIndex",
    "ExpansionOrchestrator",
    "ExpansionError",
    "__version__",
    "get_version",
    "VERSION_INFO",
]
