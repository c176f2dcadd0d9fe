"""Topic, geography, impact and deadline classification."""

from txintel.classifier.classifier import (
    Classification,
    assess_impact,
    categorize,
    classify,
    determine_type,
    extract_deadline,
    extract_location,
    extract_tags,
    is_noise,
    is_relevant,
)
from txintel.classifier.keywords import (
    DEFAULT_CATEGORY,
    DEFAULT_LOCATION,
    FOCUS_AREAS,
    LOCATION_NAMES,
)

__all__ = [
    "Classification",
    "DEFAULT_CATEGORY",
    "DEFAULT_LOCATION",
    "FOCUS_AREAS",
    "LOCATION_NAMES",
    "assess_impact",
    "categorize",
    "classify",
    "determine_type",
    "extract_deadline",
    "extract_location",
    "extract_tags",
    "is_noise",
    "is_relevant",
]
