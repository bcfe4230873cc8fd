"""Expansion orchestrator - grow the prospect set one vertical at a time."""

import logging
from typing import Dict, Iterable, List, Optional

from ..models import (
    ClassifiedProspect,
    ExpandRequest,
    ExploredVerticalEntry,
    ProspectRecord,
    UserLocale,
    utc_now,
)
from ..scope import ScopeClassifier, scope_counts
from .generator import GenerationRequest, ProspectGenerator
from .ledger import ExploredLedger

logger = logging.getLogger(__name__)


class ExpansionError(Exception):
    """An expansion request failed; orchestrator state is unchanged."""

    def __init__(self, vertical_id: str, message: str):
        super().__init__(message)
        self.vertical_id = vertical_id


class ExpansionOrchestrator:
    """
    Owns the working prospect set: core records plus expanded records.

    Features:
    - One expansion in flight at a time (re-entrant calls are ignored)
    - Explored-vertical ledger (times expanded, last expanded)
    - Generated records merged ahead of earlier expansions
    - Whole set re-classified against the current locale on every read

    Usage:
        orchestrator = ExpansionOrchestrator(generator, locale, base_records=core)
        await orchestrator.expand_vertical(ExpandRequest.for_vertical(vertical, "national"))
        for item in orchestrator.all_records():
            print(item.record.company_name, item.scope.value)
    """

    def __init__(
        self,
        generator: ProspectGenerator,
        locale: UserLocale,
        base_records: Optional[Iterable[ProspectRecord]] = None,
        classifier: Optional[ScopeClassifier] = None,
        ledger: Optional[ExploredLedger] = None,
    ):
        self.generator = generator
        self.locale = locale
        self.classifier = classifier or ScopeClassifier()
        self.ledger = ledger or ExploredLedger()
        self.base_records: List[ProspectRecord] = list(base_records or [])
        self.expanded_records: List[ProspectRecord] = []

        # In-flight marker
        self.expanding: Optional[str] = None  # Vertical id being expanded
        self.expanding_scope: Optional[str] = None
        self.last_error: Optional[str] = None

    @property
    def is_expanding(self) -> bool:
        return self.expanding is not None

    @property
    def records(self) -> List[ProspectRecord]:
        """Core records followed by expanded records (unclassified)."""
        return self.base_records + self.expanded_records

    def existing_company_names(self) -> List[str]:
        return [r.company_name for r in self.records if r.company_name]

    async def expand_vertical(self, request: ExpandRequest) -> List[ProspectRecord]:
        """
        Generate and merge new prospects for a vertical.

        Args:
            request: Vertical identity, sector, scope and example entities

        Returns:
            The newly merged records; empty if another expansion is in flight

        Raises:
            ExpansionError: The generator failed. Records and ledger are untouched.
        """
        if self.expanding is not None:
            logger.warning(
                "Ignoring expansion of '%s': '%s' is already in progress",
                request.vertical_id,
                self.expanding,
            )
            return []

        self.expanding = request.vertical_id
        self.expanding_scope = request.scope
        self.last_error = None

        logger.info("Expanding vertical '%s' (scope=%s)", request.vertical_name, request.scope)

        try:
            generated = await self.generator.generate(GenerationRequest(
                vertical_id=request.vertical_id,
                vertical_name=request.vertical_name,
                sector_name=request.sector_name,
                scope=request.scope,
                locale=self.locale,
                hints=list(request.example_entities),
                avoid=self.existing_company_names(),
            ))
            new_records = [
                r if isinstance(r, ProspectRecord) else ProspectRecord.from_dict(r)
                for r in generated
            ]
        except Exception as e:
            self.last_error = str(e) or "Failed to load more prospects"
            logger.warning("Expansion of '%s' failed: %s", request.vertical_name, self.last_error)
            raise ExpansionError(request.vertical_id, self.last_error) from e
        else:
            self._merge(request, new_records)
            logger.info(
                "Expanded '%s': %d new prospects (%d total)",
                request.vertical_name,
                len(new_records),
                len(self.base_records) + len(self.expanded_records),
            )
            return new_records
        finally:
            self.expanding = None
            self.expanding_scope = None

    def _merge(self, request: ExpandRequest, new_records: List[ProspectRecord]) -> None:
        """Apply a successful expansion. Must not await."""
        now = utc_now()
        for record in new_records:
            record.expanded_from = request.vertical_id
            record.expanded_at = now
            if not record.industry_id:
                record.industry_id = request.vertical_id

        self.expanded_records = new_records + self.expanded_records
        self.ledger.record(request, when=now)

    def all_records(self) -> List[ClassifiedProspect]:
        """Merged set, classified against the current locale."""
        return self.classifier.classify_all(self.records, self.locale)

    def scope_counts(self) -> Dict[str, int]:
        return scope_counts(self.all_records())

    def set_locale(self, locale: UserLocale) -> None:
        """Switch viewer location or radius; the next read reflects it."""
        self.locale = locale

    def explored_verticals(self) -> List[ExploredVerticalEntry]:
        return self.ledger.entries()

    def remove_expanded(self, record_id: str) -> bool:
        """Drop an expanded record by id. Core records cannot be removed."""
        before = len(self.expanded_records)
        self.expanded_records = [r for r in self.expanded_records if r.id != record_id]
        return len(self.expanded_records) < before

    def load(
        self,
        expanded_records: Iterable[ProspectRecord] = (),
        explored: Iterable[ExploredVerticalEntry] = (),
    ) -> None:
        """Seed previously stored expansions (newest first) and ledger entries."""
        self.expanded_records = [
            r if isinstance(r, ProspectRecord) else ProspectRecord.from_dict(r)
            for r in expanded_records
        ]
        self.ledger.load(explored)
