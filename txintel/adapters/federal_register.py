"""Federal Register documents API adapter.

The API is public and does not require an API key. Provider field names
have drifted over time, so each logical field is read from a list of
candidate keys and the first non-empty value wins.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from txintel.adapters.base import AdapterError, BaseAdapter
from txintel.models.schemas import FeedItem, SourceKind
from txintel.utils import parse_timestamp

logger = logging.getLogger(__name__)

TITLE_FIELDS = ("title", "document_title", "name")
SUMMARY_FIELDS = ("abstract", "summary", "excerpts", "description")
LINK_FIELDS = ("html_url", "url", "link", "pdf_url")
PUBLISHED_FIELDS = ("publication_date", "published_at", "posted_date", "date")
DEADLINE_FIELDS = ("comments_close_on", "comment_end_date", "comment_date", "deadline")
TYPE_FIELDS = ("type", "document_type")

REQUESTED_FIELDS = (
    "title",
    "abstract",
    "excerpts",
    "html_url",
    "pdf_url",
    "publication_date",
    "comments_close_on",
    "type",
    "document_number",
)

# Document types kept when narrowing to actionable documents. Anything else
# survives only if it carries a deadline.
ACTIONABLE_TYPES = frozenset({"rule", "proposed rule", "prorule"})


def first_value(doc: Dict[str, Any], fields: Tuple[str, ...]) -> Any:
    """Return the first non-empty value among candidate field names."""
    for field in fields:
        value = doc.get(field)
        if isinstance(value, str):
            value = value.strip()
        if value:
            return value
    return None


def parse_document_date(value: Any) -> Optional[date]:
    """Parse a provider date such as ``2026-03-03``."""
    if not value:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None


class FederalRegisterAdapter(BaseAdapter):
    """
    Fetch recent documents from the Federal Register JSON API.

    Requests a single page of ``api_page_size`` documents, newest first,
    matching the configured search term.
    """

    kind = SourceKind.API
    accept = "application/json"

    def _params(self) -> Dict[str, Any]:
        return {
            "conditions[term]": self.settings.federal_register_term,
            "per_page": self.settings.api_page_size,
            "order": "newest",
            "fields[]": list(REQUESTED_FIELDS),
        }

    async def _fetch_items(self, now: Optional[datetime]) -> List[FeedItem]:
        logger.debug(f"Querying {self.name}: {self.source.url}")
        response = await self._get(self.source.url, params=self._params())

        try:
            data = response.json()
        except ValueError as e:
            raise AdapterError(f"{self.name} returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise AdapterError(f"{self.name} returned unexpected payload type {type(data).__name__}")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise AdapterError(f"{self.name} 'results' is not a list")

        documents = results[: self.settings.max_entries_per_feed]
        logger.debug(f"{self.name}: {len(results)} documents, considering {len(documents)}")

        items: List[FeedItem] = []
        for doc in documents:
            if not isinstance(doc, dict):
                continue

            title = self._clean(first_value(doc, TITLE_FIELDS))
            summary = self._clean(first_value(doc, SUMMARY_FIELDS))

            if not self._is_relevant(title, summary):
                continue

            deadline = parse_document_date(first_value(doc, DEADLINE_FIELDS))
            item = self._build_item(
                ordinal=len(items),
                title=title,
                summary=summary,
                link=first_value(doc, LINK_FIELDS) or "",
                published_at=parse_timestamp(first_value(doc, PUBLISHED_FIELDS)),
                now=now,
                deadline=deadline,
            )
            if item is None:
                continue

            if self.settings.actionable_only and not self._is_actionable(doc, item):
                continue

            items.append(item)

        return items

    def _is_actionable(self, doc: Dict[str, Any], item: FeedItem) -> bool:
        """Rules and proposed rules, or any document with a deadline."""
        doc_type = str(first_value(doc, TYPE_FIELDS) or "").lower()
        return doc_type in ACTIONABLE_TYPES or item.deadline is not None
