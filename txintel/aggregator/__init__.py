"""Concurrent source aggregation, deduplication and ranking.

This module fans out to every configured source adapter, joins their
results and merges them into one deduplicated, ranked, truncated set.
"""

from txintel.aggregator.aggregator import (
    AggregationError,
    FeedAggregator,
    aggregate,
    deduplicate,
    merge,
    primary_timestamp,
    rank_results,
    sort_items,
    summarize,
)

__all__ = [
    "AggregationError",
    "FeedAggregator",
    "aggregate",
    "deduplicate",
    "merge",
    "primary_timestamp",
    "rank_results",
    "sort_items",
    "summarize",
]
