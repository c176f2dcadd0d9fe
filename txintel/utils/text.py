"""Text and timestamp normalization for raw feed content."""

import re
import time
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.DOTALL | re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Only this fixed set is decoded; anything else passes through untouched.
HTML_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&#8216;": "'",
    "&#8217;": "'",
    "&#8220;": '"',
    "&#8221;": '"',
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in HTML_ENTITIES))

_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%SZ",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%Y-%m-%d",
    "%m/%d/%Y",
)

TimestampInput = Union[str, datetime, date, time.struct_time, None]


def normalize_text(raw: Optional[str]) -> str:
    """Strip markup from raw feed text and collapse whitespace.

    Script and style blocks are dropped with their content, remaining tags are
    removed, a fixed set of entities is decoded and whitespace runs become a
    single space. Malformed markup degrades to partially stripped text; this
    never raises.
    """
    if not raw:
        return ""

    text = str(raw)
    text = _SCRIPT_RE.sub("", text)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = _ENTITY_RE.sub(lambda m: HTML_ENTITIES[m.group(0)], text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def truncate(text: str, limit: int) -> str:
    """Cut text to at most ``limit`` characters."""
    if limit <= 0:
        return ""
    return text[:limit]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: TimestampInput) -> Optional[datetime]:
    """
    Parse a feed timestamp into an aware UTC datetime.

    Accepts feedparser's ``struct_time`` values, datetimes, dates and the
    common ISO-8601 / RFC-822 string forms. Returns None when the value is
    missing or unparseable; a missing timestamp is never replaced with now.
    """
    if value is None or value == "":
        return None

    if isinstance(value, time.struct_time):
        try:
            return datetime(*value[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            return None

    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    try:
        return _as_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass

    for fmt in _DATE_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue

    return None
