"""
Tests for Import Reconciliation
===============================

Version: 0.1.0
"""

from datetime import UTC, datetime

import pytest
import pytest_asyncio

from services.regulations_analyzer.importer import ImportReconciler, ImportUnit, ReconcileAction
from services.regulations_analyzer.metrics.text import fingerprint
from services.regulations_analyzer.models import ChangeType
from services.regulations_analyzer.store import RegulationStore


ORIGINAL = "Operators shall keep records for five years."
REVISED = "Operators shall keep records for seven years under 7 CFR 10."


@pytest.fixture
def make_unit():
    def factory(agency_id: int, content: str | None, last_updated: datetime | None = None) -> ImportUnit:
        return ImportUnit(
            agency_id=agency_id,
            title_number=7,
            part_number="10",
            section_number="10.1",
            content=content,
            last_updated=last_updated,
        )

    return factory


@pytest_asyncio.fixture
async def agency_id(store: RegulationStore) -> int:
    agency = await store.create_agency("Agriculture", "USDA", 7)
    return agency.id


class TestImportReconciler:
    """Tests for ImportReconciler."""

    @pytest.mark.asyncio
    async def test_new_unit_is_created(self, store: RegulationStore, agency_id: int, make_unit) -> None:
        """Test a first import creates the regulation and a created snapshot."""
        updated = datetime(2024, 6, 1, tzinfo=UTC)

        result = await ImportReconciler(store).reconcile(make_unit(agency_id, ORIGINAL, updated))

        assert result.action == ReconcileAction.CREATED
        assert result.regulation.word_count == 7
        assert result.regulation.checksum == fingerprint(ORIGINAL)

        history = await store.list_history(result.regulation.id)
        assert len(history) == 1
        assert history[0].change_type == ChangeType.CREATED
        assert history[0].content == ORIGINAL

    @pytest.mark.asyncio
    async def test_identical_content_is_unchanged(
        self, store: RegulationStore, agency_id: int, make_unit
    ) -> None:
        """Test re-importing identical text writes nothing, not even last_updated."""
        reconciler = ImportReconciler(store)
        imported = datetime(2024, 6, 1, tzinfo=UTC)
        first = await reconciler.reconcile(make_unit(agency_id, ORIGINAL, imported))
        before = (
            first.regulation.content,
            first.regulation.word_count,
            first.regulation.complexity,
            first.regulation.checksum,
        )

        second = await reconciler.reconcile(
            make_unit(agency_id, ORIGINAL, datetime(2025, 1, 1, tzinfo=UTC))
        )

        assert second.action == ReconcileAction.UNCHANGED
        assert second.regulation.id == first.regulation.id
        assert len(await store.list_history(first.regulation.id)) == 1

        store.session.expunge_all()
        stored = await store.get_regulation(first.regulation.id)
        assert (stored.content, stored.word_count, stored.complexity, stored.checksum) == before
        # SQLite drops the offset on reload
        assert stored.last_updated.replace(tzinfo=None) == imported.replace(tzinfo=None)

    @pytest.mark.asyncio
    async def test_changed_content_is_modified(
        self, store: RegulationStore, agency_id: int, make_unit
    ) -> None:
        """Test changed text updates the regulation and snapshots the old version."""
        reconciler = ImportReconciler(store)
        first = await reconciler.reconcile(make_unit(agency_id, ORIGINAL))

        result = await reconciler.reconcile(make_unit(agency_id, REVISED))

        assert result.action == ReconcileAction.MODIFIED
        assert result.regulation.id == first.regulation.id
        assert result.regulation.content == REVISED
        assert result.regulation.checksum == fingerprint(REVISED)
        assert result.regulation.word_count == 11

        history = await store.list_history(first.regulation.id)
        assert [entry.change_type for entry in history] == [ChangeType.MODIFIED, ChangeType.CREATED]
        assert history[0].content == ORIGINAL
        assert history[0].checksum == fingerprint(ORIGINAL)
        assert history[0].word_count == 7

    @pytest.mark.asyncio
    async def test_markup_is_stripped_before_fingerprinting(
        self, store: RegulationStore, agency_id: int, make_unit
    ) -> None:
        """Test markup-only differences do not count as modifications."""
        reconciler = ImportReconciler(store)
        await reconciler.reconcile(make_unit(agency_id, ORIGINAL))

        result = await reconciler.reconcile(make_unit(agency_id, f"<p>{ORIGINAL}</p>"))

        assert result.action == ReconcileAction.UNCHANGED

    @pytest.mark.asyncio
    async def test_missing_content_stores_empty_text(
        self, store: RegulationStore, agency_id: int, make_unit
    ) -> None:
        result = await ImportReconciler(store).reconcile(make_unit(agency_id, None))

        assert result.action == ReconcileAction.CREATED
        assert result.regulation.content == ""
        assert result.regulation.word_count == 0

    @pytest.mark.asyncio
    async def test_missing_timestamp_defaults_to_now(
        self, store: RegulationStore, agency_id: int, make_unit
    ) -> None:
        before = datetime.now(UTC)

        result = await ImportReconciler(store).reconcile(make_unit(agency_id, ORIGINAL))

        assert result.regulation.last_updated >= before

    def test_unit_locator(self, make_unit) -> None:
        locator = make_unit(3, ORIGINAL).locator

        assert (locator.agency_id, locator.title_number) == (3, 7)
        assert str(locator) == "7.10.10.1"
