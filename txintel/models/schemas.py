"""Pydantic models for feed items, source configuration and API payloads."""

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Impact(str, Enum):
    """Coarse urgency tier driving display prominence."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ArticleType(str, Enum):
    """Kind of document an item describes."""

    PERMIT = "permit"
    ENFORCEMENT = "enforcement"
    POLICY = "policy"
    HUNTING = "hunting"
    DEVELOPMENT = "development"
    CONSERVATION = "conservation"
    GENERAL = "general"


class SourceKind(str, Enum):
    """How a source publishes its entries."""

    FEED = "feed"  # RSS / Atom
    API = "api"  # structured JSON document API


class _CamelModel(BaseModel):
    """Base model that accepts both field names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class SourceConfig(_CamelModel):
    """Static configuration for one external source."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(description="Human-readable source name")
    url: str = Field(description="Endpoint the adapter fetches")
    kind: SourceKind = Field(default=SourceKind.FEED)
    priority: int = Field(default=50, description="Authority ranking, 100 = primary agency")
    required_term: Optional[str] = Field(
        default=None,
        alias="requiredTerm",
        description="Entries must mention this term to be kept",
    )


class FeedItem(_CamelModel):
    """One normalized, classified entry from an upstream source."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    link: str
    source: str
    summary: str = ""
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    category: Optional[str] = None
    location: Optional[str] = None
    impact: Impact = Impact.LOW
    deadline: Optional[date] = None
    article_type: Optional[ArticleType] = Field(default=None, alias="type")
    tags: Tuple[str, ...] = ()


class SourceResult(BaseModel):
    """Outcome of one adapter fetch: its items, or the reason it failed."""

    source: str
    priority: int = Field(default=50, description="Priority of the source that produced this result")
    items: List[FeedItem] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the source was fetched and parsed without error."""
        return self.error is None


class AggregationStats(_CamelModel):
    """Distributions over the returned items plus source health counts."""

    categories: Dict[str, int] = Field(default_factory=dict)
    locations: Dict[str, int] = Field(default_factory=dict)
    sources: Dict[str, int] = Field(default_factory=dict)
    impact: Dict[str, int] = Field(default_factory=dict)
    successful_sources: int = Field(default=0, alias="successfulSources")
    failed_sources: int = Field(default=0, alias="failedSources")
    total_sources: int = Field(default=0, alias="totalSources")


class DeduplicationStats(_CamelModel):
    """How much the merge step reduced the raw item pool."""

    raw_items: int = Field(default=0, alias="rawItems")
    unique_items: int = Field(default=0, alias="uniqueItems")
    final_items: int = Field(default=0, alias="finalItems")
    reduction_percent: int = Field(default=0, alias="reductionPercent")


class AggregationResult(BaseModel):
    """Merged, ranked and truncated output of one aggregation pass."""

    items: List[FeedItem] = Field(default_factory=list)
    stats: AggregationStats = Field(default_factory=AggregationStats)
    deduplication: DeduplicationStats = Field(default_factory=DeduplicationStats)
    source_results: List[SourceResult] = Field(default_factory=list)


class UpdatesResponse(_CamelModel):
    """Outbound payload for the updates endpoints."""

    items: List[FeedItem] = Field(default_factory=list)
    count: int = 0
    generated_at: datetime = Field(alias="generatedAt")
    sources: List[str] = Field(default_factory=list)
    focus_areas: List[str] = Field(default_factory=list, alias="focusAreas")
    stats: Optional[AggregationStats] = None
    deduplication_stats: Optional[DeduplicationStats] = Field(
        default=None, alias="deduplicationStats"
    )
    error: Optional[str] = None


class ContactAttachment(_CamelModel):
    """A single file sent with a contact submission, base64 encoded."""

    filename: str
    content_type: Optional[str] = Field(default=None, alias="contentType")
    content: str


class ContactSubmission(_CamelModel):
    """Contact form fields; validation happens in txintel.contact."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    project_type: Optional[str] = Field(default=None, alias="projectType")
    message: Optional[str] = None
    attachment: Optional[ContactAttachment] = None
