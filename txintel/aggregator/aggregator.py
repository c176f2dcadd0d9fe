"""Concurrent fan-out over all sources and the merge that follows.

Adapters run concurrently and are joined, not raced: the pass finishes when
every adapter has settled. Merging happens afterwards on a single task, so
the dedup key set never sees concurrent writers.
"""

import asyncio
import logging
from collections import Counter
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from txintel.adapters import BaseAdapter, build_adapters
from txintel.classifier import DEFAULT_CATEGORY, DEFAULT_LOCATION
from txintel.config import Settings, get_settings
from txintel.models.schemas import (
    AggregationResult,
    AggregationStats,
    DeduplicationStats,
    FeedItem,
    Impact,
    SourceConfig,
    SourceResult,
)
from txintel.sources import get_sources
from txintel.utils import link_key

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
TITLE_KEY_MAX_CHARS = 200


class AggregationError(Exception):
    """Raised when the merge logic itself fails."""

    pass


# =============================================================================
# Merge steps
# =============================================================================

def dedup_keys(item: FeedItem) -> Tuple[str, str]:
    """The link key and the bounded ``source::title`` key for an item."""
    title_key = f"{item.source}::{item.title}".lower()[:TITLE_KEY_MAX_CHARS]
    return link_key(item.link), title_key


def rank_results(results: Iterable[SourceResult]) -> List[SourceResult]:
    """Highest source priority first; configuration order breaks ties."""
    return sorted(results, key=lambda result: result.priority, reverse=True)


def deduplicate(items: Iterable[FeedItem]) -> List[FeedItem]:
    """
    Drop items whose link key or title key was already seen.

    First occurrence wins, so the input order (sources ranked by priority,
    entries in upstream order) decides which copy of a story survives.
    """
    seen = set()
    kept: List[FeedItem] = []

    for item in items:
        keys = dedup_keys(item)
        if any(key in seen for key in keys):
            continue
        seen.update(keys)
        kept.append(item)

    return kept


def _deadline_timestamp(deadline: date) -> datetime:
    return datetime.combine(deadline, time.min, tzinfo=timezone.utc)


def primary_timestamp(item: FeedItem) -> datetime:
    """Later of publish time and deadline; epoch when the item has neither."""
    candidates = []
    if item.published_at is not None:
        published = item.published_at
        if published.tzinfo is None:
            published = published.replace(tzinfo=timezone.utc)
        candidates.append(published)
    if item.deadline is not None:
        candidates.append(_deadline_timestamp(item.deadline))
    return max(candidates) if candidates else EPOCH


def sort_items(items: Iterable[FeedItem]) -> List[FeedItem]:
    """Stable sort, newest primary timestamp first."""
    return sorted(items, key=primary_timestamp, reverse=True)


def summarize(
    items: Sequence[FeedItem],
    successful: int,
    failed: int,
    total: int,
) -> AggregationStats:
    """Category, location, source and impact distributions for the items."""
    categories: Counter = Counter()
    locations: Counter = Counter()
    sources: Counter = Counter()
    impact: Counter = Counter()

    for item in items:
        categories[item.category or DEFAULT_CATEGORY] += 1
        locations[item.location or DEFAULT_LOCATION] += 1
        sources[item.source] += 1
        impact[(item.impact or Impact.LOW).value] += 1

    return AggregationStats(
        categories=dict(categories),
        locations=dict(locations),
        sources=dict(sources),
        impact=dict(impact),
        successful_sources=successful,
        failed_sources=failed,
        total_sources=total,
    )


def merge(
    results: Sequence[SourceResult],
    max_items: int,
) -> AggregationResult:
    """
    Merge per-source results into the final ranked set.

    Args:
        results: One result per source, in configuration order. Results are
            ranked by source priority before deduplication.
        max_items: Truncation ceiling applied after sorting.
    """
    successful = sum(1 for r in results if r.ok)
    failed = len(results) - successful

    all_items = [
        item
        for result in rank_results(results)
        for item in result.items
        if item.title and item.link
    ]

    deduped = deduplicate(all_items)
    ranked = sort_items(deduped)
    items = ranked[: max(max_items, 0)]

    raw = len(all_items)
    reduction = round((1 - len(items) / raw) * 100) if raw else 0

    return AggregationResult(
        items=items,
        stats=summarize(items, successful, failed, len(results)),
        deduplication=DeduplicationStats(
            raw_items=raw,
            unique_items=len(deduped),
            final_items=len(items),
            reduction_percent=reduction,
        ),
        source_results=list(results),
    )


# =============================================================================
# Scheduler
# =============================================================================

class FeedAggregator:
    """
    Runs every configured adapter concurrently and merges their items.

    One adapter failing or timing out never delays or fails the others; it
    just contributes no items and counts as a failed source.
    """

    def __init__(
        self,
        sources: Optional[Sequence[SourceConfig]] = None,
        settings: Optional[Settings] = None,
        adapters: Optional[Sequence[BaseAdapter]] = None,
    ):
        """Initialize the aggregator with sources or prebuilt adapters."""
        self.settings = settings or get_settings()
        if adapters is not None:
            self.adapters = list(adapters)
        else:
            self.adapters = build_adapters(
                sources if sources is not None else get_sources(),
                settings=self.settings,
            )

    async def close(self) -> None:
        """Close all adapter HTTP clients."""
        await asyncio.gather(*(adapter.close() for adapter in self.adapters))

    async def collect(self, now: Optional[datetime] = None) -> List[SourceResult]:
        """Fetch every source concurrently and wait for all of them to settle."""
        logger.info(f"Querying {len(self.adapters)} sources...")

        outcomes = await asyncio.gather(
            *(adapter.fetch(now=now) for adapter in self.adapters),
            return_exceptions=True,
        )

        results: List[SourceResult] = []
        for adapter, outcome in zip(self.adapters, outcomes):
            if isinstance(outcome, SourceResult):
                results.append(outcome)
                continue
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            # fetch() does not raise; anything reaching here is a bug in an adapter.
            logger.error(f"Adapter {adapter.name} raised unexpectedly: {outcome!r}")
            results.append(SourceResult(
                source=adapter.name,
                priority=adapter.source.priority,
                error=repr(outcome),
            ))

        return results

    async def run(self, now: Optional[datetime] = None) -> AggregationResult:
        """
        Perform one aggregation pass.

        Raises:
            AggregationError: If merging the collected results fails.
        """
        results = await self.collect(now=now)

        successful = sum(1 for r in results if r.ok)
        logger.info(f"Success: {successful}/{len(results)} sources")
        logger.info(f"Failed: {len(results) - successful} sources")

        try:
            aggregated = merge(results, self.settings.max_items)
        except Exception as e:
            logger.exception("Failed to merge source results")
            raise AggregationError(f"Merge failed: {e}") from e

        dedup = aggregated.deduplication
        logger.info(
            f"Deduplication: {dedup.raw_items} -> {dedup.final_items} "
            f"({dedup.reduction_percent}% reduction)"
        )
        logger.info(f"Categories: {aggregated.stats.categories}")
        logger.info(f"Locations: {aggregated.stats.locations}")
        logger.info(f"Impact levels: {aggregated.stats.impact}")

        return aggregated


async def aggregate(
    sources: Optional[Sequence[SourceConfig]] = None,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> AggregationResult:
    """
    Convenience function to run a single aggregation pass.

    Args:
        sources: Sources to query (defaults to all configured sources).
        settings: Settings override.
        now: Reference time for deadline-based impact.

    Returns:
        AggregationResult with merged items and stats.
    """
    aggregator = FeedAggregator(sources=sources, settings=settings)
    try:
        return await aggregator.run(now=now)
    finally:
        await aggregator.close()
