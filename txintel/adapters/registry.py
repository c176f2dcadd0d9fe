"""Map configured sources to adapter instances."""

from typing import Dict, Iterable, List, Optional, Type

from txintel.adapters.base import BaseAdapter
from txintel.adapters.federal_register import FederalRegisterAdapter
from txintel.adapters.rss import FeedAdapter
from txintel.config import Settings
from txintel.models.schemas import SourceConfig, SourceKind

ADAPTERS: Dict[SourceKind, Type[BaseAdapter]] = {
    SourceKind.FEED: FeedAdapter,
    SourceKind.API: FederalRegisterAdapter,
}


def build_adapter(source: SourceConfig, settings: Optional[Settings] = None) -> BaseAdapter:
    """Create the adapter for one source."""
    return ADAPTERS[source.kind](source, settings=settings)


def build_adapters(
    sources: Iterable[SourceConfig],
    settings: Optional[Settings] = None,
) -> List[BaseAdapter]:
    """Create adapters for every source, preserving configuration order."""
    return [build_adapter(source, settings) for source in sources]
