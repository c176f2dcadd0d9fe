"""Shared fixtures for adapter, aggregator and API tests."""

import asyncio
from datetime import date, datetime, timezone
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from txintel.adapters.base import BaseAdapter
from txintel.config import Settings
from txintel.models.schemas import FeedItem, Impact, SourceConfig


class StubAdapter(BaseAdapter):
    """Adapter that returns canned items, raises, or stalls."""

    def __init__(
        self,
        name: str,
        items: Optional[List[FeedItem]] = None,
        delay: float = 0.0,
        error: Optional[Exception] = None,
        timeout: float = 1.0,
        priority: int = 50,
    ):
        super().__init__(
            SourceConfig(name=name, url=f"https://example.com/{name}", priority=priority),
            settings=Settings(),
            timeout=timeout,
        )
        self._items = items or []
        self._delay = delay
        self._error = error

    async def _fetch_items(self, now):
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return list(self._items)


@pytest.fixture
def stub_adapter():
    """The StubAdapter class."""
    return StubAdapter


@pytest.fixture
def make_item():
    """Factory for FeedItems with sensible defaults."""

    def _make(
        source: str = "TCEQ News",
        title: str = "Water permit issued",
        link: str = "https://example.gov/item",
        published_at: Optional[datetime] = None,
        deadline: Optional[date] = None,
        category: Optional[str] = None,
        location: Optional[str] = None,
        impact: Impact = Impact.LOW,
    ) -> FeedItem:
        return FeedItem(
            id=f"{source}-0-{link[-10:]}",
            title=title,
            link=link,
            source=source,
            published_at=published_at,
            deadline=deadline,
            category=category,
            location=location,
            impact=impact,
        )

    return _make


@pytest.fixture
def now():
    """Fixed reference time for deadline-sensitive assertions."""
    return datetime(2026, 2, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_response():
    """Factory for a mocked httpx response."""

    def _make(status_code: int = 200, text: str = "", json_data=None, json_error=None):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        if json_error is not None:
            response.json = MagicMock(side_effect=json_error)
        else:
            response.json = MagicMock(return_value=json_data)
        return response

    return _make


@pytest.fixture
def mock_client():
    """Factory for an AsyncMock client whose get() returns the given response."""

    def _make(response=None, side_effect=None):
        client = AsyncMock()
        if side_effect is not None:
            client.get = AsyncMock(side_effect=side_effect)
        else:
            client.get = AsyncMock(return_value=response)
        return client

    return _make
