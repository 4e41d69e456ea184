"""
CFR Text Sources
================

Sources that deliver regulatory text for import:
- federal_register: Live Federal Register API
- sample: Seeded synthetic text for all 50 CFR titles
"""

from services.regulations_analyzer.sources.base import (
    CFRPart,
    CFRSection,
    CFRSource,
    CFRTitle,
    HttpSource,
)
from services.regulations_analyzer.sources.federal_register import FederalRegisterSource
from services.regulations_analyzer.sources.sample import SampleCFRSource
from services.regulations_analyzer.sources.titles import CFR_TITLES, TitleInfo, title_info

__all__ = [
    "CFRPart",
    "CFRSection",
    "CFRSource",
    "CFRTitle",
    "CFR_TITLES",
    "FederalRegisterSource",
    "HttpSource",
    "SampleCFRSource",
    "TitleInfo",
    "title_info",
]
