"""Tests for the RSS/Atom feed adapter."""

import asyncio
from datetime import date, datetime, timezone
from unittest.mock import patch

import httpx
import pytest

from txintel.adapters.rss import FeedAdapter
from txintel.config import Settings
from txintel.models.schemas import ArticleType, Impact, SourceConfig


SAMPLE_RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>TCEQ News Releases</title>
    <link>https://www.tceq.texas.gov/news</link>
    <description>News from TCEQ</description>
    <item>
      <title>TCEQ issues draft water permit for Travis County plant</title>
      <link>https://www.tceq.texas.gov/news/water-permit?utm_source=rss&amp;utm_medium=feed</link>
      <pubDate>Thu, 19 Feb 2026 12:00:00 GMT</pubDate>
      <description>&lt;p&gt;The comment period closes March 3, 2026 for the draft permit.&lt;/p&gt;</description>
    </item>
    <item>
      <title>Holiday hours for permit office</title>
      <link>https://www.tceq.texas.gov/news/holiday</link>
      <pubDate>Wed, 18 Feb 2026 10:00:00 GMT</pubDate>
      <description>Offices close early.</description>
    </item>
    <item>
      <title>Football scores</title>
      <link>https://www.tceq.texas.gov/news/sports</link>
      <description>Weekend results.</description>
    </item>
    <item>
      <title>Edwards Aquifer levels decline</title>
      <guid>https://www.tceq.texas.gov/news/aquifer</guid>
      <description>Groundwater district urges conservation.</description>
    </item>
  </channel>
</rss>
"""

SAMPLE_ATOM_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>KUT Environment</title>
  <link href="https://kut.org"/>
  <entry>
    <title>Wildlife habitat restoration in Hill Country</title>
    <link href="https://kut.org/environment/habitat"/>
    <updated>2026-02-10T09:00:00Z</updated>
    <content type="html">
      &lt;p&gt;Crews begin restoration work on critical habitat.&lt;/p&gt;
    </content>
  </entry>
</feed>
"""


@pytest.fixture
def source():
    return SourceConfig(name="TCEQ News", url="https://www.tceq.texas.gov/news/news-releases.rss")


@pytest.fixture
def adapter(source):
    """Create a feed adapter instance."""
    return FeedAdapter(source, settings=Settings(), timeout=5)


class TestFeedAdapter:
    """Tests for FeedAdapter."""

    @pytest.mark.asyncio
    async def test_fetch_maps_relevant_entries(self, adapter, mock_client, mock_response, now):
        client = mock_client(mock_response(text=SAMPLE_RSS_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        assert result.ok
        assert result.source == "TCEQ News"
        titles = [item.title for item in result.items]
        assert titles == [
            "TCEQ issues draft water permit for Travis County plant",
            "Edwards Aquifer levels decline",
        ]

        first = result.items[0]
        assert first.link == "https://www.tceq.texas.gov/news/water-permit"
        assert first.published_at == datetime(2026, 2, 19, 12, 0, tzinfo=timezone.utc)
        assert first.summary == "The comment period closes March 3, 2026 for the draft permit."
        assert first.deadline == date(2026, 3, 3)
        assert first.impact == Impact.HIGH
        assert first.location == "Austin Metro"
        assert first.category == "Water & Aquifers"
        assert first.article_type == ArticleType.PERMIT
        assert first.id == "TCEQ News-0-ter-permit"

    @pytest.mark.asyncio
    async def test_guid_used_when_link_missing(self, adapter, mock_client, mock_response, now):
        client = mock_client(mock_response(text=SAMPLE_RSS_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        aquifer = result.items[1]
        assert aquifer.link == "https://www.tceq.texas.gov/news/aquifer"
        assert aquifer.id.startswith("TCEQ News-1-")

    @pytest.mark.asyncio
    async def test_missing_publish_date_is_preserved(self, adapter, mock_client, mock_response, now):
        client = mock_client(mock_response(text=SAMPLE_RSS_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        assert result.items[1].published_at is None

    @pytest.mark.asyncio
    async def test_atom_feed_uses_content(self, mock_client, mock_response, now):
        adapter = FeedAdapter(
            SourceConfig(name="KUT Austin", url="https://kut.org/term/environment/feed"),
            settings=Settings(),
        )
        client = mock_client(mock_response(text=SAMPLE_ATOM_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        assert len(result.items) == 1
        item = result.items[0]
        assert item.summary == "Crews begin restoration work on critical habitat."
        assert item.published_at == datetime(2026, 2, 10, 9, 0, tzinfo=timezone.utc)
        assert item.location == "Hill Country"

    @pytest.mark.asyncio
    async def test_entry_cap(self, source, mock_client, mock_response, now):
        adapter = FeedAdapter(source, settings=Settings(max_entries_per_feed=1))
        client = mock_client(mock_response(text=SAMPLE_RSS_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        assert len(result.items) == 1

    @pytest.mark.asyncio
    async def test_summary_truncated(self, source, mock_client, mock_response, now):
        adapter = FeedAdapter(source, settings=Settings(summary_max_chars=20))
        client = mock_client(mock_response(text=SAMPLE_RSS_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        assert result.items[0].summary == "The comment period c"
        # classification still sees the full text
        assert result.items[0].deadline == date(2026, 3, 3)

    @pytest.mark.asyncio
    async def test_required_term_filters_entries(self, mock_client, mock_response, now):
        adapter = FeedAdapter(
            SourceConfig(
                name="Federal Register (TX)",
                url="https://www.federalregister.gov/api/v1/documents.rss",
                required_term="texas",
            ),
            settings=Settings(),
        )
        client = mock_client(mock_response(text=SAMPLE_RSS_FEED))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch(now=now)

        assert [item.title for item in result.items] == []

    @pytest.mark.asyncio
    async def test_http_error_yields_failed_result(self, adapter, mock_client, mock_response):
        client = mock_client(mock_response(status_code=503))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch()

        assert not result.ok
        assert result.items == []
        assert "503" in result.error

    @pytest.mark.asyncio
    async def test_network_error_yields_failed_result(self, adapter, mock_client):
        client = mock_client(side_effect=httpx.ConnectError("connection refused"))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch()

        assert not result.ok
        assert result.items == []

    @pytest.mark.asyncio
    async def test_invalid_feed_yields_failed_result(self, adapter, mock_client, mock_response):
        client = mock_client(mock_response(text="<html><body>Not a feed"))

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch()

        assert not result.ok
        assert result.items == []

    @pytest.mark.asyncio
    async def test_timeout_yields_failed_result(self, source, mock_client):
        adapter = FeedAdapter(source, settings=Settings(), timeout=0.05)

        async def stall(*args, **kwargs):
            await asyncio.sleep(5)

        client = mock_client(side_effect=stall)

        with patch.object(adapter, "get_client", return_value=client):
            result = await adapter.fetch()

        assert not result.ok
        assert "Timed out" in result.error
