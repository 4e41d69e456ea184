"""
Federal Register Source
=======================

Live source backed by the Federal Register API.

The eCFR versioner endpoints have moved more than once, so the source
first probes a list of candidate base URLs and only proceeds when one of
them answers. Documents returned for a CFR title are then grouped by their
CFR references into titles and parts.

API Documentation: https://www.federalregister.gov/developers/documentation/api/v1

Version: 0.1.0
"""

from datetime import UTC, date, datetime
from typing import Any

import httpx

from services.regulations_analyzer.errors import SourceUnavailableError
from services.regulations_analyzer.sources.base import CFRPart, CFRSection, CFRTitle, HttpSource
from services.regulations_analyzer.sources.titles import title_info
from shared.logging import get_logger


logger = get_logger(__name__)

DEFAULT_CONTENT = "Federal regulation content"
DEFAULT_PART_NAME = "General Provisions"

DOCUMENT_FIELDS = [
    "document_number",
    "title",
    "abstract",
    "publication_date",
    "cfr_references",
]


def _publication_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        published = date.fromisoformat(str(value))
    except ValueError:
        return None
    return datetime(published.year, published.month, published.day, tzinfo=UTC)


def documents_to_titles(documents: list[dict[str, Any]]) -> list[CFRTitle]:
    """
    Group Federal Register documents into CFR titles.

    Every CFR reference of a document contributes one part holding a single
    ``<part>.1`` section with the document's abstract. The first document
    seen for a title/part wins.

    Args:
        documents: ``results`` entries of a documents search

    Returns:
        Titles in order of first appearance
    """
    titles: dict[int, CFRTitle] = {}

    for doc in documents:
        if not isinstance(doc, dict):
            continue
        references = doc.get("cfr_references")
        if not isinstance(references, list):
            continue

        for reference in references:
            if not isinstance(reference, dict):
                continue
            try:
                title_number = int(reference.get("title"))
            except (TypeError, ValueError):
                continue

            title = titles.get(title_number)
            if title is None:
                info = title_info(title_number)
                title = CFRTitle(
                    number=title_number,
                    name=info.name,
                    short_name=info.short_name,
                    description=info.description,
                )
                titles[title_number] = title

            part_number = str(reference.get("part") or 1)
            if any(part.number == part_number for part in title.parts):
                continue

            content = doc.get("abstract") or doc.get("summary") or DEFAULT_CONTENT
            title.parts.append(
                CFRPart(
                    number=part_number,
                    name=doc.get("title") or DEFAULT_PART_NAME,
                    sections=[
                        CFRSection(
                            number=f"{part_number}.1",
                            content=content,
                            last_updated=_publication_datetime(doc.get("publication_date")),
                        )
                    ],
                )
            )

    return list(titles.values())


class FederalRegisterSource(HttpSource):
    """Regulation text from the Federal Register documents API."""

    @property
    def source_name(self) -> str:
        return "federal_register"

    async def probe(self) -> str:
        """
        Find the first candidate base URL that answers.

        Returns:
            The working base URL

        Raises:
            SourceUnavailableError: if no candidate answers
        """
        client = await self._get_client()

        for base_url in self.config.probe_urls_list:
            try:
                response = await client.get(
                    f"{base_url.rstrip('/')}/",
                    timeout=self.config.probe_timeout_seconds,
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.info("source_probe_failed", url=base_url, error=str(e))
                continue

            logger.info("source_probe_succeeded", url=base_url)
            return base_url

        raise SourceUnavailableError("No working eCFR API endpoint found")

    async def fetch_documents(self) -> list[dict[str, Any]]:
        """Search documents referencing the configured CFR title."""
        params: dict[str, Any] = {
            "conditions[cfr][title]": str(self.config.cfr_title),
            "per_page": self.config.page_size,
            "order": "relevance",
            "fields[]": DOCUMENT_FIELDS,
        }

        try:
            response = await self._request(
                "GET",
                f"{self.config.federal_register_url.rstrip('/')}/documents.json",
                params=params,
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SourceUnavailableError(f"Federal Register request failed: {e}") from e

        if not isinstance(data, dict):
            raise SourceUnavailableError(
                f"Federal Register returned {type(data).__name__}, expected an object"
            )

        results = data.get("results") or []
        if not isinstance(results, list):
            raise SourceUnavailableError("Federal Register results is not a list")
        return results

    async def fetch_titles(self) -> list[CFRTitle]:
        await self.probe()

        documents = await self.fetch_documents()
        titles = documents_to_titles(documents)
        if not titles:
            raise SourceUnavailableError("Federal Register returned no documents with CFR references")

        logger.info(
            "federal_register_fetched",
            documents=len(documents),
            titles=len(titles),
            parts=sum(len(t.parts) for t in titles),
        )
        return titles
