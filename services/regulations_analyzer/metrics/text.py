"""
Text Metrics
============

Pure functions deriving measurements from regulation text:

- word count (whitespace-delimited tokens)
- content fingerprint (SHA-256) used for change detection
- heuristic complexity score (0-100)

None of these raise: missing or non-string input is measured as empty text.

Version: 0.1.0
"""

import hashlib
import html
import math
import re
from dataclasses import dataclass
from typing import Any


SIGNAL_TERMS = (
    "shall",
    "must",
    "required",
    "pursuant",
    "thereof",
    "compliance",
    "standards",
)

SIGNAL_TERM_PATTERN = re.compile(r"\b(?:" + "|".join(SIGNAL_TERMS) + r")\b", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r"\d+")
CFR_REFERENCE_PATTERN = re.compile(r"\b\d+\s*CFR\s*\d+", re.IGNORECASE)
SENTENCE_TERMINATOR_PATTERN = re.compile(r"[.!?]+")

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class ComplexityWeights:
    """Weights and scaling for the complexity composite."""

    sentence_length: float = 0.3
    signal_density: float = 0.4
    numeric_density: float = 0.2
    cross_references: float = 0.1

    # Each cross reference counts as this many points before weighting
    reference_scale: float = 5.0
    max_score: float = 100.0


DEFAULT_WEIGHTS = ComplexityWeights()


@dataclass(frozen=True)
class TextMeasurement:
    """All derived fields of one content string."""

    word_count: int
    complexity: float
    checksum: str


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with halves rounded away from zero."""
    factor = 10**digits
    if value < 0:
        return -math.floor(-value * factor + 0.5) / factor
    return math.floor(value * factor + 0.5) / factor


def _as_text(text: Any) -> str:
    return text if isinstance(text, str) else ""


def word_count(text: str | None) -> int:
    """Count maximal runs of non-whitespace characters."""
    return len(_as_text(text).split())


def fingerprint(text: str | None) -> str:
    """SHA-256 hex digest of the text (absent text hashes as empty)."""
    return hashlib.sha256(_as_text(text).encode("utf-8")).hexdigest()


def sentence_count(text: str | None) -> int:
    """Number of sentence terminator runs (``.``, ``!``, ``?``)."""
    return len(SENTENCE_TERMINATOR_PATTERN.split(_as_text(text))) - 1


def complexity_score(
    text: str | None,
    weights: ComplexityWeights = DEFAULT_WEIGHTS,
) -> float:
    """
    Heuristic complexity of a regulation's text.

    Weighted sum of average words per sentence, signal-term density,
    numeric-token density and CFR cross-reference count, clamped to
    [0, 100] and rounded to one decimal.

    Args:
        text: Regulation text
        weights: Component weights

    Returns:
        Score between 0 and 100
    """
    text = _as_text(text)
    words = word_count(text)
    if words == 0:
        return 0.0

    sentences = sentence_count(text)
    avg_words_per_sentence = words / sentences if sentences > 0 else 0.0

    signal_terms = len(SIGNAL_TERM_PATTERN.findall(text))
    numbers = len(NUMBER_PATTERN.findall(text))
    references = len(CFR_REFERENCE_PATTERN.findall(text))

    score = (
        avg_words_per_sentence * weights.sentence_length
        + (signal_terms / words) * 100 * weights.signal_density
        + (numbers / words) * 100 * weights.numeric_density
        + references * weights.reference_scale * weights.cross_references
    )

    return round_half_up(min(weights.max_score, max(0.0, score)))


def extract_text(content: str | None) -> str:
    """
    Reduce HTML or markup-bearing content to plain text.

    Tags become spaces, entities are decoded and whitespace runs collapse
    to single spaces.
    """
    text = _as_text(content)
    if not text:
        return ""

    text = _TAG_PATTERN.sub(" ", text)
    text = html.unescape(text).replace("\xa0", " ")
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def measure(text: str | None, weights: ComplexityWeights = DEFAULT_WEIGHTS) -> TextMeasurement:
    """Compute every derived field from the same content string."""
    return TextMeasurement(
        word_count=word_count(text),
        complexity=complexity_score(text, weights),
        checksum=fingerprint(text),
    )
