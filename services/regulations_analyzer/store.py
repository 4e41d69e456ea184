"""
Regulation Store
================

SQLAlchemy-backed persistence for agencies, regulations, history and
cached metrics.

A store is bound to one ``AsyncSession``. Methods flush but never commit;
the caller owns the transaction, so multi-entity sequences (history append
plus regulation update, delete-then-insert of metrics) commit or roll back
together.

Version: 0.1.0
"""

import functools
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import and_, case, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from services.regulations_analyzer.errors import StoreError
from services.regulations_analyzer.metrics.text import TextMeasurement
from services.regulations_analyzer.models import (
    Agency,
    AnalysisMetric,
    CFRLocator,
    ChangeType,
    Regulation,
    RegulationHistory,
)
from shared.logging import get_logger


logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def store_operation(name: str) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Translate SQLAlchemy failures of a store method into ``StoreError``."""

    def decorator(func_: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func_)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func_(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error("store_operation_failed", operation=name, error=str(e))
                raise StoreError(name, str(e)) from e

        return wrapper

    return decorator


@dataclass(frozen=True)
class AgencyWordStats:
    """Grouped word statistics for one agency."""

    id: int
    name: str
    short_name: str | None
    title_number: int | None
    description: str | None
    regulation_count: int
    total_words: int
    avg_word_count: float
    max_word_count: int
    min_word_count: int
    avg_complexity: float


@dataclass(frozen=True)
class WordTotals:
    """Word statistics across all regulations with content."""

    regulation_count: int
    total_words: int
    avg_words: float
    max_words: int


class RegulationStore:
    """Store contract implementation over one SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Agencies
    # ------------------------------------------------------------------

    @store_operation("find_agency_by_title_number")
    async def find_agency_by_title_number(self, title_number: int) -> Agency | None:
        result = await self.session.execute(
            select(Agency).where(Agency.title_number == title_number).order_by(Agency.id).limit(1)
        )
        return result.scalar_one_or_none()

    @store_operation("create_agency")
    async def create_agency(
        self,
        name: str,
        short_name: str | None = None,
        title_number: int | None = None,
        description: str | None = None,
    ) -> Agency:
        agency = Agency(
            name=name,
            short_name=short_name,
            title_number=title_number,
            description=description,
        )
        self.session.add(agency)
        await self.session.flush()

        logger.info("agency_created", agency_id=agency.id, title_number=title_number, name=name)
        return agency

    async def find_or_create_agency(
        self,
        title_number: int,
        name: str,
        short_name: str | None = None,
        description: str | None = None,
    ) -> Agency:
        """Look an agency up by CFR title number, creating it when absent."""
        agency = await self.find_agency_by_title_number(title_number)
        if agency is not None:
            return agency
        return await self.create_agency(
            name=name,
            short_name=short_name,
            title_number=title_number,
            description=description,
        )

    @store_operation("get_agency")
    async def get_agency(self, agency_id: int) -> Agency | None:
        return await self.session.get(Agency, agency_id)

    @store_operation("list_agencies")
    async def list_agencies(self) -> list[Agency]:
        result = await self.session.execute(select(Agency).order_by(Agency.name))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Regulations
    # ------------------------------------------------------------------

    @store_operation("find_regulation")
    async def find_regulation(self, locator: CFRLocator) -> Regulation | None:
        result = await self.session.execute(
            select(Regulation).where(
                Regulation.agency_id == locator.agency_id,
                Regulation.title_number == locator.title_number,
                Regulation.part_number == locator.part_number,
                Regulation.section_number == locator.section_number,
            )
        )
        return result.scalar_one_or_none()

    @store_operation("get_regulation")
    async def get_regulation(self, regulation_id: int) -> Regulation | None:
        result = await self.session.execute(
            select(Regulation)
            .options(selectinload(Regulation.agency))
            .where(Regulation.id == regulation_id)
        )
        return result.scalar_one_or_none()

    @store_operation("create_regulation")
    async def create_regulation(
        self,
        locator: CFRLocator,
        content: str,
        measurement: TextMeasurement,
        last_updated: datetime,
    ) -> Regulation:
        regulation = Regulation(
            agency_id=locator.agency_id,
            title_number=locator.title_number,
            part_number=locator.part_number,
            section_number=locator.section_number,
            content=content,
            word_count=measurement.word_count,
            complexity=measurement.complexity,
            checksum=measurement.checksum,
            last_updated=last_updated,
        )
        self.session.add(regulation)
        await self.session.flush()
        return regulation

    @store_operation("update_regulation")
    async def update_regulation(
        self,
        regulation: Regulation,
        content: str,
        measurement: TextMeasurement,
        last_updated: datetime,
    ) -> Regulation:
        regulation.content = content
        regulation.word_count = measurement.word_count
        regulation.complexity = measurement.complexity
        regulation.checksum = measurement.checksum
        regulation.last_updated = last_updated
        await self.session.flush()
        return regulation

    @store_operation("list_regulations_by_agency")
    async def list_regulations_by_agency(self, agency_id: int) -> list[Regulation]:
        result = await self.session.execute(
            select(Regulation).where(Regulation.agency_id == agency_id).order_by(Regulation.id)
        )
        return list(result.scalars().all())

    @store_operation("list_regulations")
    async def list_regulations(
        self,
        offset: int = 0,
        limit: int = 20,
        agency_id: int | None = None,
    ) -> tuple[int, list[Regulation]]:
        """Page through regulations, most recently updated first."""
        count_query = select(func.count(Regulation.id))
        query = select(Regulation).options(selectinload(Regulation.agency))
        if agency_id is not None:
            count_query = count_query.where(Regulation.agency_id == agency_id)
            query = query.where(Regulation.agency_id == agency_id)

        total = (await self.session.execute(count_query)).scalar_one()
        result = await self.session.execute(
            query.order_by(Regulation.last_updated.desc(), Regulation.id).offset(offset).limit(limit)
        )
        return total, list(result.scalars().all())

    @store_operation("longest_regulations")
    async def longest_regulations(
        self,
        limit: int = 10,
        agency_id: int | None = None,
        min_words: int = 0,
    ) -> list[Regulation]:
        query = (
            select(Regulation)
            .options(selectinload(Regulation.agency))
            .where(Regulation.word_count >= min_words)
        )
        if agency_id is not None:
            query = query.where(Regulation.agency_id == agency_id)
        result = await self.session.execute(
            query.order_by(Regulation.word_count.desc(), Regulation.id).limit(limit)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @store_operation("append_history")
    async def append_history(
        self,
        regulation_id: int,
        change_type: ChangeType,
        content: str,
        word_count: int,
        checksum: str,
    ) -> RegulationHistory:
        entry = RegulationHistory(
            regulation_id=regulation_id,
            change_type=change_type,
            content=content,
            word_count=word_count,
            checksum=checksum,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    @store_operation("list_history")
    async def list_history(self, regulation_id: int, limit: int = 10) -> list[RegulationHistory]:
        result = await self.session.execute(
            select(RegulationHistory)
            .where(RegulationHistory.regulation_id == regulation_id)
            .order_by(RegulationHistory.recorded_at.desc(), RegulationHistory.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @store_operation("replace_metrics")
    async def replace_metrics(self, agency_id: int, metrics: Mapping[str, float]) -> None:
        """Delete the agency's metrics and insert the new set in the same transaction."""
        await self.session.execute(delete(AnalysisMetric).where(AnalysisMetric.agency_id == agency_id))
        self.session.add_all(
            AnalysisMetric(agency_id=agency_id, metric_name=name, metric_value=float(value))
            for name, value in metrics.items()
        )
        await self.session.flush()

    @store_operation("get_metrics")
    async def get_metrics(self, agency_id: int) -> dict[str, float]:
        result = await self.session.execute(
            select(AnalysisMetric.metric_name, AnalysisMetric.metric_value).where(
                AnalysisMetric.agency_id == agency_id
            )
        )
        return {name: value for name, value in result.all()}

    # ------------------------------------------------------------------
    # Aggregation queries
    # ------------------------------------------------------------------

    @store_operation("counts")
    async def counts(self) -> tuple[int, int]:
        """Number of agencies and regulations."""
        agencies = (await self.session.execute(select(func.count(Agency.id)))).scalar_one()
        regulations = (await self.session.execute(select(func.count(Regulation.id)))).scalar_one()
        return agencies, regulations

    @store_operation("agency_word_stats")
    async def agency_word_stats(
        self,
        agency_id: int | None = None,
        only_with_regulations: bool = False,
    ) -> list[AgencyWordStats]:
        """Per-agency regulation counts and word statistics (LEFT JOIN)."""
        reg_count = func.count(Regulation.id)
        join_on = Regulation.agency_id == Agency.id
        if only_with_regulations:
            # Regulations without text do not count towards the statistics
            join_on = and_(join_on, Regulation.word_count > 0)

        query = (
            select(
                Agency.id,
                Agency.name,
                Agency.short_name,
                Agency.title_number,
                Agency.description,
                reg_count.label("regulation_count"),
                func.coalesce(func.sum(Regulation.word_count), 0).label("total_words"),
                func.coalesce(func.avg(Regulation.word_count), 0).label("avg_word_count"),
                func.coalesce(func.max(Regulation.word_count), 0).label("max_word_count"),
                func.coalesce(func.min(Regulation.word_count), 0).label("min_word_count"),
                func.coalesce(func.avg(Regulation.complexity), 0).label("avg_complexity"),
            )
            .outerjoin(Regulation, join_on)
            .group_by(Agency.id, Agency.name, Agency.short_name, Agency.title_number, Agency.description)
        )
        if agency_id is not None:
            query = query.where(Agency.id == agency_id)
        if only_with_regulations:
            query = query.having(reg_count > 0)

        result = await self.session.execute(query.order_by(Agency.name))
        return [
            AgencyWordStats(
                id=row.id,
                name=row.name,
                short_name=row.short_name,
                title_number=row.title_number,
                description=row.description,
                regulation_count=int(row.regulation_count),
                total_words=int(row.total_words),
                avg_word_count=float(row.avg_word_count),
                max_word_count=int(row.max_word_count),
                min_word_count=int(row.min_word_count),
                avg_complexity=float(row.avg_complexity),
            )
            for row in result.all()
        ]

    @store_operation("word_totals")
    async def word_totals(self) -> WordTotals:
        """Word statistics over regulations with a positive word count."""
        result = await self.session.execute(
            select(
                func.count(Regulation.id),
                func.coalesce(func.sum(Regulation.word_count), 0),
                func.coalesce(func.avg(Regulation.word_count), 0),
                func.coalesce(func.max(Regulation.word_count), 0),
            ).where(Regulation.word_count > 0)
        )
        count, total, avg, maximum = result.one()
        return WordTotals(
            regulation_count=int(count),
            total_words=int(total),
            avg_words=float(avg),
            max_words=int(maximum),
        )

    @store_operation("length_distribution")
    async def length_distribution(self, bounds: Mapping[str, int]) -> dict[str, int]:
        """
        Count regulations per length bucket.

        Args:
            bounds: Ordered mapping of bucket label to exclusive upper word
                bound; longer regulations fall in the ``"Very High"`` bucket.
        """
        bucket = case(
            *[(Regulation.word_count < upper, label) for label, upper in bounds.items()],
            else_="Very High",
        ).label("bucket")
        result = await self.session.execute(
            select(bucket, func.count(Regulation.id)).where(Regulation.word_count > 0).group_by(bucket)
        )
        counts: dict[str, Any] = {label: 0 for label in [*bounds, "Very High"]}
        for label, count in result.all():
            counts[label] = int(count)
        return counts
