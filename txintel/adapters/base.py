"""Base adapter interface and the shared entry-to-item mapping."""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import httpx

from txintel.classifier import classify, is_relevant
from txintel.config import Settings, get_settings
from txintel.models.schemas import FeedItem, SourceConfig, SourceKind, SourceResult
from txintel.utils import canonicalize_url, normalize_text, truncate

logger = logging.getLogger(__name__)


class AdapterError(Exception):
    """Raised inside an adapter when a source cannot be fetched or parsed."""

    pass


class BaseAdapter(ABC):
    """
    Abstract base class for source adapters.

    An adapter owns one external endpoint. ``fetch()`` never raises: any
    failure is logged with the source name and reported as a failed
    ``SourceResult`` with no items.
    """

    kind: SourceKind = SourceKind.FEED
    accept: str = "*/*"

    def __init__(
        self,
        source: SourceConfig,
        settings: Optional[Settings] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the adapter for one configured source."""
        self.source = source
        self.settings = settings or get_settings()
        self.timeout = timeout if timeout is not None else self.settings.fetch_timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def name(self) -> str:
        return self.source.name

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create an HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers={
                    "User-Agent": self.settings.user_agent,
                    "Accept": self.accept,
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def fetch(self, now: Optional[datetime] = None) -> SourceResult:
        """
        Fetch, filter and map this source's entries under a hard timeout.

        Args:
            now: Reference time for deadline-based impact.

        Returns:
            SourceResult with items on success, or an error and no items.
        """
        try:
            items = await asyncio.wait_for(self._fetch_items(now), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{self.name}: timed out after {self.timeout:g}s")
            return SourceResult(
                source=self.name,
                priority=self.source.priority,
                error=f"Timed out after {self.timeout:g}s",
            )
        except Exception as e:
            logger.error(f"Failed to fetch {self.name}: {e}")
            return SourceResult(
                source=self.name,
                priority=self.source.priority,
                error=str(e) or type(e).__name__,
            )

        logger.info(f"{self.name}: {len(items)} items after filtering")
        return SourceResult(source=self.name, priority=self.source.priority, items=items)

    @abstractmethod
    async def _fetch_items(self, now: Optional[datetime]) -> List[FeedItem]:
        """
        Fetch the source and map its entries to FeedItems.

        Raises:
            AdapterError: If the source cannot be fetched or parsed.
        """
        pass

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """GET a URL, raising AdapterError on a non-200 response."""
        client = await self.get_client()
        response = await client.get(url, params=params)

        if response.status_code != 200:
            raise AdapterError(
                f"{self.name} returned status {response.status_code}: {url}"
            )
        return response

    def _is_relevant(self, title: str, summary: str) -> bool:
        return is_relevant(f"{title} {summary}", self.source.required_term)

    def _build_item(
        self,
        ordinal: int,
        title: str,
        summary: str,
        link: str,
        published_at: Optional[datetime],
        now: Optional[datetime] = None,
        deadline: Optional[date] = None,
    ) -> Optional[FeedItem]:
        """
        Build a FeedItem from normalized text.

        Returns None when the entry lacks a title or link.
        """
        link = canonicalize_url(link)
        if not title or not link:
            return None

        result = classify(title, summary, now=now, deadline=deadline)

        return FeedItem(
            id=f"{self.name}-{ordinal}-{link[-10:]}",
            title=title,
            link=link,
            source=self.name,
            summary=truncate(summary, self.settings.summary_max_chars),
            published_at=published_at,
            category=result.category,
            location=result.location,
            impact=result.impact,
            deadline=result.deadline,
            article_type=result.article_type,
            tags=result.tags,
        )

    @staticmethod
    def _clean(value: Any) -> str:
        """Normalize a raw upstream value to plain text."""
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value if v)
        return normalize_text(str(value))
