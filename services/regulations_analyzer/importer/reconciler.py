"""
Import Reconciliation
=====================

Reconciles one incoming section of regulatory text against the stored
regulation at the same CFR locator.

Outcomes:
- created: no stored regulation; row plus ``created`` history snapshot
- unchanged: identical fingerprint; nothing is written
- modified: fingerprint differs; the replaced snapshot is appended to
  history, then the regulation is overwritten

Version: 0.1.0
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from services.regulations_analyzer.metrics.text import extract_text, measure
from services.regulations_analyzer.models import CFRLocator, ChangeType, Regulation
from services.regulations_analyzer.store import RegulationStore
from shared.logging import get_logger


logger = get_logger(__name__)


class ReconcileAction(str, Enum):
    """What reconciliation did with an incoming unit."""

    CREATED = "created"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ImportUnit:
    """One section of regulatory text as delivered by a source."""

    agency_id: int
    title_number: int
    part_number: str
    section_number: str
    content: str | None
    last_updated: datetime | None = None

    @property
    def locator(self) -> CFRLocator:
        return CFRLocator(
            agency_id=self.agency_id,
            title_number=self.title_number,
            part_number=str(self.part_number),
            section_number=str(self.section_number),
        )


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of reconciling one unit."""

    action: ReconcileAction
    regulation: Regulation


class ImportReconciler:
    """
    Fingerprint-based create/update decision for imported text.

    Content is reduced to plain text before it is measured, so markup-only
    differences do not count as modifications. Store errors propagate to
    the caller, which owns the transaction.
    """

    def __init__(self, store: RegulationStore) -> None:
        self.store = store

    async def reconcile(self, unit: ImportUnit) -> ReconcileResult:
        """
        Create, update or skip the regulation at the unit's locator.

        Args:
            unit: Incoming section text

        Returns:
            ReconcileResult with the action taken and the stored regulation
        """
        locator = unit.locator
        content = extract_text(unit.content)
        measurement = measure(content)
        last_updated = unit.last_updated or datetime.now(UTC)

        existing = await self.store.find_regulation(locator)

        if existing is None:
            regulation = await self.store.create_regulation(
                locator=locator,
                content=content,
                measurement=measurement,
                last_updated=last_updated,
            )
            await self.store.append_history(
                regulation_id=regulation.id,
                change_type=ChangeType.CREATED,
                content=content,
                word_count=measurement.word_count,
                checksum=measurement.checksum,
            )
            logger.debug("regulation_created", locator=str(locator), word_count=measurement.word_count)
            return ReconcileResult(action=ReconcileAction.CREATED, regulation=regulation)

        if existing.checksum == measurement.checksum:
            return ReconcileResult(action=ReconcileAction.UNCHANGED, regulation=existing)

        previous_word_count = existing.word_count

        # History keeps the snapshot being replaced
        await self.store.append_history(
            regulation_id=existing.id,
            change_type=ChangeType.MODIFIED,
            content=existing.content,
            word_count=existing.word_count,
            checksum=existing.checksum,
        )
        regulation = await self.store.update_regulation(
            existing,
            content=content,
            measurement=measurement,
            last_updated=last_updated,
        )

        logger.info(
            "regulation_modified",
            locator=str(locator),
            old_word_count=previous_word_count,
            new_word_count=measurement.word_count,
        )
        return ReconcileResult(action=ReconcileAction.MODIFIED, regulation=regulation)
