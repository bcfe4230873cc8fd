"""
Programmatic API for the VIGYL prospect core.

Usage:
    from vigyl.api import load_records, classify_prospects

    records = load_records("prospects.json")
    results = classify_prospects(records, region="GA", local_radius=100)
    local = [r for r in results if r.scope.value == "local"]
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from vigyl.config import Settings, load_config
from vigyl.expansion import ExpansionOrchestrator, GatewayGenerator
from vigyl.models import ClassifiedProspect, ExpandRequest, ProspectRecord, UserLocale
from vigyl.scope import filter_by_scope
from vigyl.taxonomy import IndustryTaxonomyIndex

logger = logging.getLogger(__name__)


def load_records(path: str) -> List[ProspectRecord]:
    """
    Load prospect records from a JSON file.

    Accepts a list of records or an object with a "prospects" list.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("prospects", [])

    records = [ProspectRecord.from_dict(item) for item in data]
    logger.debug("Loaded %d records from %s", len(records), path)
    return records


def classify_prospects(
    records: Iterable[ProspectRecord],
    country: str = "US",
    region: str = "",
    city: str = "",
    local_radius: Optional[int] = None,
    scope: Optional[str] = None,
    config_path: Optional[str] = None,
) -> List[ClassifiedProspect]:
    """
    Classify prospects for a viewer location.

    Args:
        records: Prospect records
        country: Viewer country (defaults to the home country)
        region: Viewer state/region, name or code
        city: Viewer city
        local_radius: Radius in miles (defaults to the configured radius)
        scope: Keep only this scope ("local", "national", "international")
        config_path: Optional path to YAML config

    Returns:
        Classified prospects in input order
    """
    settings = load_config(config_path) if config_path else Settings()
    locale = UserLocale(
        country=country,
        region=region,
        city=city,
        local_radius=settings.clamp_radius(local_radius),
    )

    classified = settings.build_classifier().classify_all(records, locale)
    return filter_by_scope(classified, scope)


def expand_prospects(
    vertical_id: str,
    locale: UserLocale,
    scope: str = "all",
    records: Iterable[ProspectRecord] = (),
    config_path: Optional[str] = None,
) -> List[ClassifiedProspect]:
    """
    Run one expansion for a catalog vertical and return the merged, classified set.

    Raises:
        KeyError: Unknown vertical id
        ExpansionError: The generator failed
    """
    settings = load_config(config_path) if config_path else Settings()
    index = IndustryTaxonomyIndex.from_file(settings.taxonomy_path)

    vertical = index.get(vertical_id)
    if vertical is None:
        raise KeyError(f"Unknown vertical: {vertical_id}")

    request = ExpandRequest.for_vertical(vertical, scope=scope)

    async def run() -> List[ClassifiedProspect]:
        async with GatewayGenerator.from_settings(settings) as generator:
            orchestrator = ExpansionOrchestrator(
                generator,
                locale,
                base_records=records,
                classifier=settings.build_classifier(),
            )
            await orchestrator.expand_vertical(request)
            return orchestrator.all_records()

    return asyncio.run(run())
