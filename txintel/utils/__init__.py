"""Utility modules for text and link normalization."""

from txintel.utils.text import normalize_text, parse_timestamp, truncate
from txintel.utils.urls import TRACKING_PARAMS, canonicalize_url, link_key

__all__ = [
    "TRACKING_PARAMS",
    "canonicalize_url",
    "link_key",
    "normalize_text",
    "parse_timestamp",
    "truncate",
]
