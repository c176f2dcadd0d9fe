"""Pydantic models for structured data."""

from .schemas import (
    AggregationResult,
    AggregationStats,
    ArticleType,
    ContactAttachment,
    ContactSubmission,
    DeduplicationStats,
    FeedItem,
    Impact,
    SourceConfig,
    SourceKind,
    SourceResult,
    UpdatesResponse,
)

__all__ = [
    "AggregationResult",
    "AggregationStats",
    "ArticleType",
    "ContactAttachment",
    "ContactSubmission",
    "DeduplicationStats",
    "FeedItem",
    "Impact",
    "SourceConfig",
    "SourceKind",
    "SourceResult",
    "UpdatesResponse",
]
