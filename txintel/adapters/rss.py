"""RSS/Atom feed adapter for agency and news outlet feeds."""

import logging
from datetime import datetime
from typing import List, Optional

import feedparser

from txintel.adapters.base import AdapterError, BaseAdapter
from txintel.models.schemas import FeedItem, SourceKind
from txintel.utils import parse_timestamp

logger = logging.getLogger(__name__)

# Checked in order; the first one that parses wins.
_DATE_FIELDS = (
    "published_parsed",
    "updated_parsed",
    "created_parsed",
    "published",
    "updated",
    "created",
    "date",
)


class FeedAdapter(BaseAdapter):
    """
    Fetch a syndicated feed and map its entries to FeedItems.

    Only the first ``max_entries_per_feed`` entries are considered. Entries
    failing the relevance filter are dropped before classification.
    """

    kind = SourceKind.FEED
    accept = "application/rss+xml, application/xml, text/xml, */*"

    async def _fetch_items(self, now: Optional[datetime]) -> List[FeedItem]:
        logger.debug(f"Fetching feed {self.name}: {self.source.url}")
        response = await self._get(self.source.url)

        feed = feedparser.parse(response.text)

        if feed.bozo and not feed.entries:
            raise AdapterError(f"Invalid feed from {self.name}: {feed.get('bozo_exception')}")

        if not feed.entries:
            logger.warning(f"{self.name} returned no entries")
            return []

        entries = feed.entries[: self.settings.max_entries_per_feed]
        logger.debug(f"{self.name}: {len(feed.entries)} raw entries, considering {len(entries)}")

        items: List[FeedItem] = []
        for entry in entries:
            title = self._clean(entry.get("title"))
            summary = self._clean(self._get_summary(entry))

            if not self._is_relevant(title, summary):
                continue

            item = self._build_item(
                ordinal=len(items),
                title=title,
                summary=summary,
                link=entry.get("link") or entry.get("id") or "",
                published_at=self._parse_date(entry),
                now=now,
            )
            if item is not None:
                items.append(item)

        return items

    def _get_summary(self, entry: dict) -> str:
        """Entry description, falling back to the full content body."""
        summary = entry.get("summary") or entry.get("description") or ""
        if summary:
            return summary

        if "content" in entry and entry.content and len(entry.content) > 0:
            return entry.content[0].get("value", "")

        return ""

    def _parse_date(self, entry: dict) -> Optional[datetime]:
        """Publication time of an entry, or None when the feed gives none."""
        for field in _DATE_FIELDS:
            value = entry.get(field)
            if not value:
                continue
            parsed = parse_timestamp(value)
            if parsed is not None:
                return parsed
        return None
