"""
Data Import Pipeline
====================

Batch driver that pulls CFR text from a source and reconciles it into
the store, then refreshes the cached per-agency metrics.

Pipeline stages:
1. Fetch titles from the live source, falling back to the sample source
2. Find or create one agency per title
3. Reconcile each part's sections in its own transaction
4. Recompute aggregate statistics and deregulation scores per agency

Version: 0.1.0
"""

import asyncio
import random
import uuid
from collections import Counter
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.regulations_analyzer.errors import (
    AnalyzerError,
    SourceUnavailableError,
    UnitError,
    UnitProcessingError,
)
from services.regulations_analyzer.importer.reconciler import (
    ImportReconciler,
    ImportUnit,
    ReconcileAction,
)
from services.regulations_analyzer.metrics import AgencyAggregator, DeregulationScorer
from services.regulations_analyzer.sources import (
    CFRPart,
    CFRSource,
    CFRTitle,
    FederalRegisterSource,
    SampleCFRSource,
    title_info,
)
from services.regulations_analyzer.store import RegulationStore
from shared.config import ImportSettings, Settings
from shared.database import DatabaseClient
from shared.logging import bind_context, clear_context, get_logger


logger = get_logger(__name__)

SessionScope = Callable[[], AbstractAsyncContextManager[AsyncSession]]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class ImportReport:
    """Summary of one import pass."""

    source: str = ""
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    duration_seconds: float = 0.0

    imported: int = 0
    created: int = 0
    modified: int = 0
    unchanged: int = 0

    errors: list[UnitError] = field(default_factory=list)
    agencies_scored: int = 0

    def record(self, actions: Counter[ReconcileAction]) -> None:
        self.created += actions[ReconcileAction.CREATED]
        self.modified += actions[ReconcileAction.MODIFIED]
        self.unchanged += actions[ReconcileAction.UNCHANGED]
        self.imported += sum(actions.values())

    def complete(self) -> None:
        self.completed_at = datetime.now(UTC)
        self.duration_seconds = round((self.completed_at - self.started_at).total_seconds(), 2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "imported": self.imported,
            "created": self.created,
            "modified": self.modified,
            "unchanged": self.unchanged,
            "errors": [{"locator": e.locator, "message": e.message} for e in self.errors],
            "agencies_scored": self.agencies_scored,
        }


class DataImporter:
    """
    Imports regulation text and refreshes analysis metrics.

    Every collaborator is injected: the session scope (a transactional
    context manager such as ``DatabaseClient.session``), both sources,
    the aggregator, the scorer and the sleep function used for pacing.
    """

    def __init__(
        self,
        session_scope: SessionScope,
        live_source: CFRSource | None,
        fallback_source: CFRSource,
        settings: ImportSettings | None = None,
        aggregator: AgencyAggregator | None = None,
        scorer: DeregulationScorer | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.session_scope = session_scope
        self.live_source = live_source
        self.fallback_source = fallback_source
        self.settings = settings or ImportSettings()
        self.aggregator = aggregator or AgencyAggregator()
        self.scorer = scorer or DeregulationScorer()
        self._sleep = sleep

    async def run(self) -> ImportReport:
        """
        Run one full import pass.

        Returns:
            ImportReport with per-action counts and recorded unit errors
        """
        report = ImportReport()
        bind_context(import_id=uuid.uuid4().hex[:12])
        logger.info("import_started", use_live_source=self.settings.use_live_source)

        try:
            source, titles = await self._load_titles()
            report.source = source.source_name

            for title in titles:
                await self.process_title(title, report, paced=source.is_live)
                if source.is_live:
                    await self._sleep(self.settings.title_delay_seconds)

            report.agencies_scored = await self.calculate_metrics(report)
            report.complete()
            self._log_summary(report)
        finally:
            await self.close()
            clear_context()

        return report

    async def close(self) -> None:
        """Release source resources."""
        if self.live_source is not None:
            await self.live_source.close()
        await self.fallback_source.close()

    async def _load_titles(self) -> tuple[CFRSource, list[CFRTitle]]:
        if self.settings.use_live_source and self.live_source is not None:
            try:
                titles = await self.live_source.fetch_titles()
                logger.info("live_source_connected", source=self.live_source.source_name)
                return self.live_source, titles
            except SourceUnavailableError as e:
                logger.warning(
                    "live_source_unavailable",
                    source=self.live_source.source_name,
                    fallback=self.fallback_source.source_name,
                    error=str(e),
                )

        titles = await self.fallback_source.fetch_titles()
        return self.fallback_source, titles

    async def process_title(self, title: CFRTitle, report: ImportReport, paced: bool = False) -> None:
        """Find or create the title's agency, then import up to the configured number of parts."""
        logger.info("title_processing", title_number=title.number, name=title.name)

        info = title_info(title.number)
        try:
            async with self.session_scope() as session:
                agency = await RegulationStore(session).find_or_create_agency(
                    title_number=title.number,
                    name=title.name,
                    short_name=title.short_name or info.short_name,
                    description=title.description or info.description,
                )
                agency_id = agency.id
        except (AnalyzerError, SQLAlchemyError) as e:
            error = UnitProcessingError(f"title {title.number}", str(e))
            report.errors.append(UnitError.from_exception(error))
            logger.error("title_failed", title_number=title.number, error=str(e))
            return

        parts = title.parts[: self.settings.max_parts_per_title]
        for part in parts:
            await self.process_part(agency_id, title.number, part, report)
            if paced:
                await self._sleep(self.settings.part_delay_seconds)

        logger.info("title_completed", title_number=title.number, parts=len(parts))

    async def process_part(
        self,
        agency_id: int,
        title_number: int,
        part: CFRPart,
        report: ImportReport,
    ) -> None:
        """
        Reconcile every section of one part in a single transaction.

        A failure rolls the whole part back and is recorded in the report;
        the batch carries on with the next part.
        """
        locator = f"{title_number}.{part.number}"
        actions: Counter[ReconcileAction] = Counter()

        try:
            async with self.session_scope() as session:
                reconciler = ImportReconciler(RegulationStore(session))
                for section in part.sections:
                    result = await reconciler.reconcile(
                        ImportUnit(
                            agency_id=agency_id,
                            title_number=title_number,
                            part_number=str(part.number),
                            section_number=str(section.number),
                            content=section.content,
                            last_updated=section.last_updated,
                        )
                    )
                    actions[result.action] += 1
        except (AnalyzerError, SQLAlchemyError) as e:
            error = UnitProcessingError(locator, str(e))
            report.errors.append(UnitError.from_exception(error))
            logger.error("part_failed", locator=locator, error=str(e))
            return

        report.record(actions)
        logger.debug("part_completed", locator=locator, sections=len(part.sections))

    async def calculate_metrics(self, report: ImportReport | None = None) -> int:
        """
        Recompute cached metrics for every agency with regulations.

        Each agency's metric set is replaced in its own transaction.

        Returns:
            Number of agencies scored
        """
        async with self.session_scope() as session:
            agency_ids = [agency.id for agency in await RegulationStore(session).list_agencies()]

        now = datetime.now(UTC)
        scored = 0

        for agency_id in agency_ids:
            try:
                async with self.session_scope() as session:
                    store = RegulationStore(session)
                    regulations = await store.list_regulations_by_agency(agency_id)
                    stats = self.aggregator.aggregate(agency_id, regulations, now=now)
                    if stats is None:
                        continue

                    score = self.scorer.score(stats)
                    await store.replace_metrics(
                        agency_id,
                        self.aggregator.to_metrics(stats, score.score),
                    )
            except (AnalyzerError, SQLAlchemyError) as e:
                logger.error("metrics_failed", agency_id=agency_id, error=str(e))
                if report is not None:
                    error = UnitProcessingError(f"agency {agency_id} metrics", str(e))
                    report.errors.append(UnitError.from_exception(error))
                continue

            scored += 1
            logger.debug(
                "agency_scored",
                agency_id=agency_id,
                regulations=stats.regulation_count,
                deregulation_score=score.score,
            )

        logger.info("metrics_calculated", agencies=scored)
        return scored

    def _log_summary(self, report: ImportReport) -> None:
        logger.info(
            "import_completed",
            source=report.source,
            duration_seconds=report.duration_seconds,
            imported=report.imported,
            created=report.created,
            modified=report.modified,
            unchanged=report.unchanged,
            errors=len(report.errors),
            agencies_scored=report.agencies_scored,
        )
        for error in report.errors[:5]:
            logger.warning("import_unit_error", locator=error.locator, message=error.message)


def build_importer(db: DatabaseClient, settings: Settings) -> DataImporter:
    """Wire a DataImporter with the configured sources."""
    config = settings.importer
    live_source = FederalRegisterSource(config) if config.use_live_source else None
    return DataImporter(
        session_scope=db.session,
        live_source=live_source,
        fallback_source=SampleCFRSource(random.Random(config.sample_seed)),
        settings=config,
        aggregator=AgencyAggregator(recent_days=settings.analysis.recent_update_days),
    )
