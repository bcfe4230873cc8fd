"""In-memory workspace shared by the API endpoints."""

import logging
from typing import Iterable, List, Optional

from vigyl.config import Settings, load_config
from vigyl.expansion import (
    ExpansionOrchestrator,
    GatewayGenerator,
    GenerationRequest,
    ProspectGenerator,
)
from vigyl.models import ProspectRecord, UserLocale
from vigyl.taxonomy import IndustryTaxonomyIndex

logger = logging.getLogger(__name__)


class SettingsGenerator(ProspectGenerator):
    """Builds the gateway client on first use so the API starts without a key."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._generator: Optional[GatewayGenerator] = None

    async def generate(self, request: GenerationRequest) -> List[ProspectRecord]:
        if self._generator is None:
            self._generator = GatewayGenerator.from_settings(self.settings)
        return await self._generator.generate(request)

    async def aclose(self) -> None:
        if self._generator is not None:
            await self._generator.aclose()
            self._generator = None


class Workspace:
    """Taxonomy index, classifier and expansion orchestrator for one user session."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        index: Optional[IndustryTaxonomyIndex] = None,
        generator: Optional[ProspectGenerator] = None,
        locale: Optional[UserLocale] = None,
        base_records: Iterable[ProspectRecord] = (),
    ):
        self.settings = settings or load_config()
        self.index = index or IndustryTaxonomyIndex.from_file(self.settings.taxonomy_path)
        self.classifier = self.settings.build_classifier()
        self.generator = generator or SettingsGenerator(self.settings)
        self.orchestrator = ExpansionOrchestrator(
            self.generator,
            locale or UserLocale(
                country=self.settings.home_country,
                local_radius=self.settings.default_local_radius,
            ),
            base_records=base_records,
            classifier=self.classifier,
        )

    async def close(self) -> None:
        await self.generator.aclose()
