"""Keyword and pattern based classification of normalized feed text.

Every function here is pure and total: unmatched input yields the unset or
default value for that dimension, never an exception.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Pattern, Tuple

from txintel.classifier.keywords import (
    CATEGORY_KEYWORDS,
    HIGH_IMPACT_DEADLINE_WINDOW,
    HIGH_IMPACT_KEYWORDS,
    LOCATIONS,
    LOW_VALUE_FILTERS,
    MEDIUM_IMPACT_DEADLINE_WINDOW,
    MEDIUM_IMPACT_KEYWORDS,
    TOPICAL_KEYWORDS,
    KeywordTable,
)
from txintel.models.schemas import ArticleType, Impact


# =============================================================================
# Deadline extraction
# =============================================================================

_DATE_CAPTURE = r"([A-Z][a-z]+\s+\d{1,2},?\s+\d{4})"


def parse_month_day_year(value: str) -> Optional[date]:
    """Parse dates like ``March 3, 2026``, ``Mar 3 2026`` or ``Sept 30, 2026``."""
    cleaned = " ".join(value.replace(",", " ").split())
    parts = cleaned.split(" ")
    if len(parts) != 3:
        return None

    month, day, year = parts
    for candidate, fmt in (
        (f"{month} {day} {year}", "%B %d %Y"),
        (f"{month} {day} {year}", "%b %d %Y"),
        (f"{month[:3]} {day} {year}", "%b %d %Y"),
    ):
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    return None


# Ordered (pattern, parser) pairs. The first pattern whose capture parses wins;
# a pattern that matches but does not parse falls through to the next one.
DEADLINE_PATTERNS: Tuple[Tuple[Pattern[str], Callable[[str], Optional[date]]], ...] = (
    (re.compile(r"by\s+" + _DATE_CAPTURE, re.IGNORECASE), parse_month_day_year),
    (re.compile(r"deadline[:\s]+" + _DATE_CAPTURE, re.IGNORECASE), parse_month_day_year),
    (re.compile(r"comment period closes?\s+" + _DATE_CAPTURE, re.IGNORECASE), parse_month_day_year),
    (re.compile(r"comments? due\s+" + _DATE_CAPTURE, re.IGNORECASE), parse_month_day_year),
    (re.compile(r"through\s+" + _DATE_CAPTURE, re.IGNORECASE), parse_month_day_year),
    (re.compile(r"until\s+" + _DATE_CAPTURE, re.IGNORECASE), parse_month_day_year),
)


def extract_deadline(text: str) -> Optional[date]:
    """Return the first deadline date found in the text, if any."""
    if not text:
        return None

    for pattern, parser in DEADLINE_PATTERNS:
        match = pattern.search(text)
        if match:
            parsed = parser(match.group(1))
            if parsed:
                return parsed
    return None


# =============================================================================
# Table lookups
# =============================================================================

def _fold(text: str) -> str:
    return (text or "").lower()


def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def _first_match(text: str, table: KeywordTable) -> Optional[str]:
    folded = _fold(text)
    for name, keywords in table:
        if _contains_any(folded, keywords):
            return name
    return None


def categorize(text: str) -> Optional[str]:
    """First topic category with a matching keyword, in table order."""
    return _first_match(text, CATEGORY_KEYWORDS)


def extract_location(text: str) -> Optional[str]:
    """First geography with a matching keyword, in table order."""
    return _first_match(text, LOCATIONS)


def _in_window(days: int, window: Tuple[int, int]) -> bool:
    low, high = window
    return low <= days <= high


def assess_impact(
    text: str,
    deadline: Optional[date] = None,
    now: Optional[datetime] = None,
) -> Impact:
    """
    Assign an impact tier.

    A deadline close to ``now`` outranks keywords: within -1..14 days is high,
    within -1..30 days is medium. Otherwise high/medium keyword lists decide,
    falling back to low.
    """
    if deadline is not None:
        today = (now or datetime.now(timezone.utc)).date()
        days = (deadline - today).days
        if _in_window(days, HIGH_IMPACT_DEADLINE_WINDOW):
            return Impact.HIGH
        if _in_window(days, MEDIUM_IMPACT_DEADLINE_WINDOW):
            return Impact.MEDIUM

    folded = _fold(text)
    if _contains_any(folded, HIGH_IMPACT_KEYWORDS):
        return Impact.HIGH
    if _contains_any(folded, MEDIUM_IMPACT_KEYWORDS):
        return Impact.MEDIUM
    return Impact.LOW


def determine_type(text: str, category: Optional[str] = None) -> ArticleType:
    """Coarse document kind; rules are checked in order."""
    folded = _fold(text)

    if "permit" in folded or category == "Construction Permits":
        return ArticleType.PERMIT
    if _contains_any(folded, ("enforcement", "violation", "fine")):
        return ArticleType.ENFORCEMENT
    if _contains_any(folded, ("policy", "rule", "regulation")):
        return ArticleType.POLICY
    if category == "Hunting & Wildlife" or _contains_any(folded, ("hunting", "season")):
        return ArticleType.HUNTING
    if category == "Land Development" or _contains_any(folded, ("development", "construction")):
        return ArticleType.DEVELOPMENT
    if category == "Conservation & Habitat" or "conservation" in folded:
        return ArticleType.CONSERVATION
    return ArticleType.GENERAL


def extract_tags(text: str, deadline: Optional[date] = None) -> Tuple[str, ...]:
    """Short labels describing urgency, scope and audience."""
    folded = _fold(text)
    tags: List[str] = []

    if _contains_any(folded, ("urgent", "emergency")):
        tags.append("urgent")
    if deadline is not None or _contains_any(folded, ("deadline", "comment period")):
        tags.append("deadline")
    if _contains_any(folded, ("new", "announced")):
        tags.append("new")
    if _contains_any(folded, ("public hearing", "public meeting")):
        tags.append("public-input")
    if "federal" in folded:
        tags.append("federal")
    if "state" in folded:
        tags.append("state")
    if _contains_any(folded, ("local", "city", "county")):
        tags.append("local")

    return tuple(tags)


# =============================================================================
# Relevance
# =============================================================================

def is_noise(text: str) -> bool:
    """True when the text matches the low-value list."""
    return _contains_any(_fold(text), LOW_VALUE_FILTERS)


def is_relevant(text: str, required_term: Optional[str] = None) -> bool:
    """
    Decide whether an entry is worth classifying.

    Noise exclusion takes precedence; then the optional per-source required
    term must be present; then at least one topical keyword must match.
    """
    folded = _fold(text)
    if _contains_any(folded, LOW_VALUE_FILTERS):
        return False
    if required_term and required_term.lower() not in folded:
        return False
    return _contains_any(folded, TOPICAL_KEYWORDS)


# =============================================================================
# Combined
# =============================================================================

@dataclass(frozen=True)
class Classification:
    """All classifier outputs for one entry."""

    category: Optional[str]
    location: Optional[str]
    impact: Impact
    deadline: Optional[date]
    article_type: ArticleType
    tags: Tuple[str, ...] = field(default_factory=tuple)


def classify(
    title: str,
    summary: str,
    now: Optional[datetime] = None,
    deadline: Optional[date] = None,
) -> Classification:
    """
    Classify an entry from its normalized title and summary.

    Args:
        title: Normalized title.
        summary: Normalized, untruncated summary.
        now: Reference time for deadline proximity (defaults to current UTC).
        deadline: A deadline already known from structured data; when absent
            one is extracted from the text.
    """
    text = f"{title} {summary}"
    if deadline is None:
        deadline = extract_deadline(text)

    category = categorize(text)
    return Classification(
        category=category,
        location=extract_location(text),
        impact=assess_impact(text, deadline=deadline, now=now),
        deadline=deadline,
        article_type=determine_type(text, category),
        tags=extract_tags(text, deadline),
    )
