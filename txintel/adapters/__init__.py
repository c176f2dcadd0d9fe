"""Source adapters for syndicated feeds and the Federal Register API."""

from .base import AdapterError, BaseAdapter
from .federal_register import FederalRegisterAdapter
from .registry import build_adapter, build_adapters
from .rss import FeedAdapter

__all__ = [
    "AdapterError",
    "BaseAdapter",
    "FederalRegisterAdapter",
    "FeedAdapter",
    "build_adapter",
    "build_adapters",
]
