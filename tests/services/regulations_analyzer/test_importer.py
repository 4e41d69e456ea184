"""
Tests for the Data Import Pipeline
==================================

Tests for:
- Source selection and fallback
- Pacing and part limits
- Per-part error isolation
- Idempotent re-import and metric replacement

Version: 0.1.0
"""

from unittest.mock import AsyncMock, call, patch

import httpx
import pytest
from sqlalchemy import func, select

from services.regulations_analyzer.errors import StoreError
from services.regulations_analyzer.importer import DataImporter
from services.regulations_analyzer.metrics import MetricName
from services.regulations_analyzer.models import AnalysisMetric, Regulation, RegulationHistory
from services.regulations_analyzer.sources import CFRTitle, FederalRegisterSource
from services.regulations_analyzer.store import RegulationStore
from shared.config import ImportSettings
from shared.database import DatabaseClient
from tests.factories import StaticSource, UnavailableSource, make_title


async def count_rows(db: DatabaseClient, model) -> int:
    async with db.session() as session:
        return (await session.execute(select(func.count(model.id)))).scalar_one()


def build(
    db: DatabaseClient,
    fallback: StaticSource,
    settings: ImportSettings,
    live: StaticSource | None = None,
    sleep: AsyncMock | None = None,
) -> DataImporter:
    return DataImporter(
        session_scope=db.session,
        live_source=live,
        fallback_source=fallback,
        settings=settings,
        sleep=sleep or AsyncMock(),
    )


# ============================================================================
# Source Selection Tests
# ============================================================================


class TestSourceSelection:
    """Tests for live source usage and fallback."""

    @pytest.mark.asyncio
    async def test_falls_back_when_live_source_unavailable(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
        import_settings: ImportSettings,
    ) -> None:
        """Test an unreachable live source switches to the fallback without pacing."""
        sleep = AsyncMock()
        fallback = StaticSource(sample_titles)
        live = UnavailableSource()

        report = await build(db, fallback, import_settings, live=live, sleep=sleep).run()

        assert report.source == "static"
        assert report.created == 9
        assert report.errors == []
        sleep.assert_not_called()
        assert fallback.closed
        assert live.closed

    @pytest.mark.asyncio
    async def test_falls_back_on_malformed_live_payload(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
        import_settings: ImportSettings,
    ) -> None:
        """Test a live payload of the wrong shape switches to the fallback."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "fr.test":
                return httpx.Response(200, json={"results": [{"cfr_references": ["40 CFR 60"]}]})
            return httpx.Response(200)

        live = FederalRegisterSource(
            ImportSettings(
                probe_urls="https://up.test/api",
                federal_register_url="https://fr.test/v1",
                max_retries=1,
                requests_per_minute=6000,
            )
        )
        live._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        report = await build(
            db, StaticSource(sample_titles), import_settings, live=live
        ).run()

        assert report.source == "static"
        assert report.created == 9
        assert report.errors == []

    @pytest.mark.asyncio
    async def test_live_source_is_paced(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
        import_settings: ImportSettings,
    ) -> None:
        """Test a live import sleeps after every part and every title."""
        sleep = AsyncMock()
        live = StaticSource(sample_titles, name="live", live=True)

        report = await build(db, StaticSource([]), import_settings, live=live, sleep=sleep).run()

        assert report.source == "live"
        # title 7: three parts, then the title; title 40: one part, then the title
        assert sleep.await_args_list == [
            call(0.3),
            call(0.3),
            call(0.3),
            call(0.2),
            call(0.3),
            call(0.2),
        ]

    @pytest.mark.asyncio
    async def test_live_source_skipped_when_disabled(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
    ) -> None:
        live = StaticSource([], name="live", live=True)
        live.fetch_titles = AsyncMock(return_value=[])  # type: ignore[method-assign]

        report = await build(
            db, StaticSource(sample_titles), ImportSettings(use_live_source=False), live=live
        ).run()

        assert report.source == "static"
        live.fetch_titles.assert_not_awaited()


# ============================================================================
# Import Tests
# ============================================================================


class TestImport:
    """Tests for reconciliation through the pipeline."""

    @pytest.mark.asyncio
    async def test_imports_every_section(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
    ) -> None:
        """Test agencies, regulations and created snapshots are written."""
        report = await build(db, StaticSource(sample_titles), ImportSettings(use_live_source=False)).run()

        assert report.imported == 9
        assert (report.created, report.modified, report.unchanged) == (9, 0, 0)
        assert report.completed_at is not None
        assert await count_rows(db, Regulation) == 9
        assert await count_rows(db, RegulationHistory) == 9

        async with db.session() as session:
            agencies = await RegulationStore(session).list_agencies()
        assert [(a.name, a.title_number, a.short_name) for a in agencies] == [
            ("Agriculture", 7, "T7"),
            ("Protection of Environment", 40, "T40"),
        ]
        assert agencies[0].description == "Federal regulations for Agriculture"

    @pytest.mark.asyncio
    async def test_limits_parts_per_title(self, db: DatabaseClient) -> None:
        title = make_title(7, "Agriculture", ["1", "2", "3", "4", "5"], sections_per_part=1)
        settings = ImportSettings(use_live_source=False, max_parts_per_title=2)

        report = await build(db, StaticSource([title]), settings).run()

        assert report.imported == 2
        assert await count_rows(db, Regulation) == 2

    @pytest.mark.asyncio
    async def test_reimport_is_idempotent(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
    ) -> None:
        """Test importing the same data twice changes nothing."""
        settings = ImportSettings(use_live_source=False)
        await build(db, StaticSource(sample_titles), settings).run()

        report = await build(db, StaticSource(sample_titles), settings).run()

        assert (report.created, report.modified, report.unchanged) == (0, 0, 9)
        assert await count_rows(db, Regulation) == 9
        assert await count_rows(db, RegulationHistory) == 9

    @pytest.mark.asyncio
    async def test_changed_text_is_modified(self, db: DatabaseClient) -> None:
        settings = ImportSettings(use_live_source=False)
        await build(db, StaticSource([make_title(7, "Agriculture", ["10"])]), settings).run()

        revised = make_title(7, "Agriculture", ["10"], revision=" Amended.")
        report = await build(db, StaticSource([revised]), settings).run()

        assert (report.created, report.modified, report.unchanged) == (0, 2, 0)
        assert await count_rows(db, Regulation) == 2
        assert await count_rows(db, RegulationHistory) == 4

    @pytest.mark.asyncio
    async def test_failed_part_is_isolated(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
    ) -> None:
        """Test a store failure rolls back only its part and is reported."""
        real_create = RegulationStore.create_regulation

        async def failing_create(self, locator, *args, **kwargs):
            if locator.section_number == "20.2":
                raise StoreError("create_regulation", "disk full")
            return await real_create(self, locator, *args, **kwargs)

        with patch.object(RegulationStore, "create_regulation", failing_create):
            report = await build(
                db, StaticSource(sample_titles), ImportSettings(use_live_source=False)
            ).run()

        assert report.created == 7
        assert len(report.errors) == 1
        assert report.errors[0].locator == "7.20"
        assert "disk full" in report.errors[0].message

        async with db.session() as session:
            parts = (await session.execute(select(Regulation.part_number))).scalars().all()
        assert "20" not in parts
        assert await count_rows(db, Regulation) == 7


# ============================================================================
# Metrics Tests
# ============================================================================


class TestMetrics:
    """Tests for per-agency metric calculation."""

    @pytest.mark.asyncio
    async def test_metrics_written_per_agency(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
    ) -> None:
        report = await build(db, StaticSource(sample_titles), ImportSettings(use_live_source=False)).run()

        assert report.agencies_scored == 2

        async with db.session() as session:
            store = RegulationStore(session)
            agency = (await store.list_agencies())[0]
            metrics = await store.get_metrics(agency.id)

        assert metrics[MetricName.REGULATION_COUNT] == 6.0
        assert 10.0 <= metrics[MetricName.DEREGULATION_SCORE] <= 100.0
        assert set(metrics) == {
            MetricName.TOTAL_WORDS,
            MetricName.AVG_WORDS,
            MetricName.AVG_COMPLEXITY,
            MetricName.UPDATE_FREQUENCY,
            MetricName.DEREGULATION_SCORE,
            MetricName.REGULATION_COUNT,
        }

    @pytest.mark.asyncio
    async def test_metrics_are_replaced_not_duplicated(
        self,
        db: DatabaseClient,
        sample_titles: list[CFRTitle],
    ) -> None:
        importer = build(db, StaticSource(sample_titles), ImportSettings(use_live_source=False))
        await importer.run()

        await importer.calculate_metrics()

        assert await count_rows(db, AnalysisMetric) == 12

    @pytest.mark.asyncio
    async def test_agency_without_regulations_gets_no_metrics(self, db: DatabaseClient) -> None:
        """Test a title with no parts creates its agency but no metrics."""
        empty = make_title(3, "The President", [])

        report = await build(db, StaticSource([empty]), ImportSettings(use_live_source=False)).run()

        assert report.agencies_scored == 0
        assert await count_rows(db, AnalysisMetric) == 0
        async with db.session() as session:
            assert len(await RegulationStore(session).list_agencies()) == 1
