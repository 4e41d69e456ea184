"""
Sample Source
=============

Synthetic CFR text for all 50 titles, used when the live source is
unavailable or when a reproducible data set is wanted.

All randomness comes from the injected ``random.Random``, so a seeded
generator always produces the same titles, parts, sections and dates.

Version: 0.1.0
"""

import random
from datetime import UTC, datetime

from services.regulations_analyzer.sources.base import CFRPart, CFRSection, CFRSource, CFRTitle
from services.regulations_analyzer.sources.titles import CFR_TITLES, TitleInfo


SPECIFIC_REQUIREMENTS = (
    "Detailed record-keeping requirements include maintaining all supporting documentation for a minimum of seven years.",
    "Regular reporting obligations require submission of quarterly compliance reports and annual certification statements.",
    "Inspection procedures include announced and unannounced visits by authorized federal representatives.",
    "Training requirements mandate annual certification for all personnel involved in regulated activities.",
    "Quality assurance programs must include internal audits, corrective action procedures, and management review.",
    "Public notification procedures require timely disclosure of material changes affecting regulated activities.",
    "Financial assurance requirements include bonding, insurance, or other acceptable forms of security.",
    "Environmental monitoring includes regular sampling, analysis, and reporting of specified parameters.",
    "Emergency response procedures must address potential incidents and include notification requirements.",
    "Appeal procedures allow for administrative review of adverse decisions with specified timeframes.",
)

PART_NAMES = {
    1: "General Provisions",
    10: "General Provisions and Definitions",
    20: "Implementation Standards",
    30: "Administrative Procedures",
    40: "Compliance and Enforcement",
}

UPDATE_WINDOW_START = datetime(2023, 1, 1, tzinfo=UTC)
UPDATE_WINDOW_END = datetime(2024, 12, 31, tzinfo=UTC)


class SampleCFRSource(CFRSource):
    """
    Generates realistic-looking regulation text.

    Each title gets 2-4 parts numbered 10, 20, ...; each part gets 2-5
    sections numbered ``<part>.<n>``.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    @property
    def source_name(self) -> str:
        return "sample"

    async def fetch_titles(self) -> list[CFRTitle]:
        return [self.generate_title(info) for info in CFR_TITLES]

    def generate_title(self, info: TitleInfo) -> CFRTitle:
        part_count = self.rng.randint(2, 4)
        parts = [self.generate_part(info, i * 10) for i in range(1, part_count + 1)]
        return CFRTitle(
            number=info.number,
            name=info.name,
            short_name=info.short_name,
            description=info.description,
            parts=parts,
        )

    def generate_part(self, info: TitleInfo, part_number: int) -> CFRPart:
        section_count = self.rng.randint(2, 5)
        return CFRPart(
            number=str(part_number),
            name=PART_NAMES.get(part_number, f"{info.name} - Part {part_number}"),
            sections=[
                CFRSection(
                    number=f"{part_number}.{i}",
                    content=self.generate_content(info),
                    last_updated=self.random_update_date(),
                )
                for i in range(1, section_count + 1)
            ],
        )

    def generate_content(self, info: TitleInfo) -> str:
        """Title template followed by 2-3 specific requirement sentences."""
        selected: list[str] = []
        for _ in range(self.rng.randint(2, 3)):
            sentence = self.rng.choice(SPECIFIC_REQUIREMENTS)
            # Repeated picks are dropped, so a section may carry fewer sentences
            if sentence not in selected:
                selected.append(sentence)
        return " ".join([info.template, *selected])

    def random_update_date(self) -> datetime:
        return UPDATE_WINDOW_START + (UPDATE_WINDOW_END - UPDATE_WINDOW_START) * self.rng.random()
