"""URL canonicalization used as the identity of a story during dedup."""

from typing import Optional
from urllib.parse import unquote_plus, urlsplit, urlunsplit

TRACKING_PARAMS = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
    }
)


def canonicalize_url(url: Optional[str]) -> str:
    """
    Remove tracking query parameters from a URL.

    Only absolute URLs (scheme and host) are rewritten; anything else is
    returned unchanged. The remaining query segments keep their original
    order and encoding, so the function is idempotent.

    Args:
        url: The link as published upstream.

    Returns:
        The canonical link.
    """
    if not url:
        return ""

    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return url

    if not parts.scheme or not parts.netloc:
        return url

    kept = []
    for segment in parts.query.split("&"):
        if not segment:
            continue
        key = unquote_plus(segment.split("=", 1)[0])
        if key in TRACKING_PARAMS:
            continue
        kept.append(segment)

    return urlunsplit(
        (
            parts.scheme.lower(),
            parts.netloc.lower(),
            parts.path,
            "&".join(kept),
            parts.fragment,
        )
    )


def link_key(url: Optional[str]) -> str:
    """Case-folded canonical link, the primary dedup key."""
    return canonicalize_url(url).lower()
