"""Outbound payload shaping and cache-control policy.

Everything here is pure: the same inputs always give the same payload and
headers.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from txintel.classifier import FOCUS_AREAS
from txintel.config import Settings
from txintel.models.schemas import AggregationResult, FeedItem, UpdatesResponse

EMPTY_RESULT_MESSAGE = "No updates available. Feeds may be temporarily unavailable."
FATAL_ERROR_MESSAGE = "System error. Please try again."
NO_STORE = "no-store"


class CachePolicy(str, Enum):
    """How long downstream caches may keep a response."""

    STANDARD = "standard"  # slow-moving agency and news feeds
    REALTIME = "realtime"  # must always reflect the latest regulatory postings


def cache_control(policy: CachePolicy, settings: Settings, empty: bool = False) -> str:
    """
    Cache-Control header value for a successful or degraded response.

    Empty results are cached briefly so dead sources are not hammered.
    """
    if policy == CachePolicy.REALTIME:
        return NO_STORE
    if empty:
        return f"public, s-maxage={settings.empty_cache_max_age}"
    return (
        f"public, s-maxage={settings.cache_max_age}, "
        f"stale-while-revalidate={settings.cache_stale_while_revalidate}"
    )


def distinct_sources(items: Sequence[FeedItem]) -> List[str]:
    """Source names present in the items, in first-appearance order."""
    seen: Dict[str, None] = {}
    for item in items:
        seen.setdefault(item.source, None)
    return list(seen)


def build_updates_payload(
    result: AggregationResult,
    generated_at: datetime,
    focus_areas: Optional[Sequence[str]] = None,
) -> UpdatesResponse:
    """Wrap an aggregation result in the outbound payload shape."""
    items = list(result.items)
    return UpdatesResponse(
        items=items,
        count=len(items),
        generated_at=generated_at,
        sources=distinct_sources(items),
        focus_areas=list(focus_areas if focus_areas is not None else FOCUS_AREAS),
        stats=result.stats,
        deduplication_stats=result.deduplication,
        error=None if items else EMPTY_RESULT_MESSAGE,
    )


def build_error_payload(generated_at: datetime) -> UpdatesResponse:
    """Payload for an aggregator-internal failure."""
    return UpdatesResponse(
        items=[],
        count=0,
        generated_at=generated_at,
        error=FATAL_ERROR_MESSAGE,
    )


def to_json(payload: UpdatesResponse) -> Dict[str, Any]:
    """Serialize with camelCase keys, omitting absent optional fields."""
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
