"""Static, process-wide source configuration.

For duplicate stories the source with the higher priority wins; between
equal priorities, the source listed first wins.
"""

from typing import List, Optional, Tuple

from txintel.models.schemas import SourceConfig, SourceKind

FEDERAL_REGISTER_API_URL = "https://www.federalregister.gov/api/v1/documents.json"

SOURCES: Tuple[SourceConfig, ...] = (
    # ==================== STATE AGENCIES ====================
    SourceConfig(
        name="TCEQ News",
        url="https://www.tceq.texas.gov/news/news-releases.rss",
        priority=100,
    ),
    SourceConfig(
        name="TPWD",
        url="https://tpwd.texas.gov/newsmedia/releases/?format=rss",
        priority=100,
    ),
    SourceConfig(
        name="Railroad Commission",
        url="https://www.rrc.texas.gov/news/rss/",
        priority=100,
    ),
    SourceConfig(
        name="TX General Land Office",
        url="https://www.glo.texas.gov/the-glo/news/rss.xml",
        priority=100,
    ),
    # ==================== TEXAS NEWS OUTLETS ====================
    SourceConfig(
        name="Texas Tribune",
        url="https://www.texastribune.org/feeds/latest/",
        priority=80,
    ),
    SourceConfig(
        name="Austin Monitor",
        url="https://www.austinmonitor.com/feed/",
        priority=80,
    ),
    SourceConfig(
        name="Houston Chronicle",
        url="https://www.houstonchronicle.com/rss/feed/Texas-165.php",
        priority=70,
    ),
    SourceConfig(
        name="Dallas Morning News",
        url="https://www.dallasnews.com/feed/",
        priority=70,
    ),
    SourceConfig(
        name="Austin American-Statesman",
        url="https://www.statesman.com/rss/",
        priority=70,
    ),
    SourceConfig(
        name="San Antonio Express-News",
        url="https://www.expressnews.com/rss/feed/San-Antonio-and-South-Texas-News-151.php",
        priority=70,
    ),
    # ==================== FEDERAL SOURCES ====================
    SourceConfig(
        name="Federal Register (TX)",
        url=(
            "https://www.federalregister.gov/api/v1/documents.rss"
            "?conditions%5Bterm%5D=Texas%20environmental"
            "&conditions%5Btype%5D%5B%5D=RULE&order=newest"
        ),
        priority=85,
        required_term="texas",
    ),
    SourceConfig(
        name="EPA Region 6",
        url="https://www.epa.gov/tx/rss.xml",
        priority=90,
    ),
    SourceConfig(
        name="US Army Corps (Fort Worth)",
        url="https://www.swf.usace.army.mil/RSS/Rss.aspx?RSS=LatestNews",
        priority=90,
    ),
    SourceConfig(
        name="US Army Corps (Galveston)",
        url="https://www.swg.usace.army.mil/RSS/Rss.aspx?RSS=LatestNews",
        priority=90,
    ),
    # ==================== REGIONAL SOURCES ====================
    SourceConfig(
        name="mySA Environment",
        url="https://www.mysanantonio.com/rss/feed/mySA-Environment-11668.php",
        priority=60,
    ),
    SourceConfig(
        name="Chron Texas",
        url="https://www.chron.com/rss/feed/Texas-165.php",
        priority=60,
    ),
    # ==================== PUBLIC MEDIA & TRADE ====================
    SourceConfig(
        name="Texas Monthly",
        url="https://www.texasmonthly.com/feed/",
        priority=55,
    ),
    SourceConfig(
        name="Houston Public Media",
        url="https://www.houstonpublicmedia.org/articles/news/energy-environment/rss.xml",
        priority=65,
    ),
    SourceConfig(
        name="KUT Austin",
        url="https://kut.org/term/environment/feed",
        priority=65,
    ),
    SourceConfig(
        name="KERA Dallas",
        url="https://www.kera.org/category/environment/feed/",
        priority=65,
    ),
    # ==================== STRUCTURED DOCUMENT API ====================
    SourceConfig(
        name="Federal Register API",
        url=FEDERAL_REGISTER_API_URL,
        kind=SourceKind.API,
        priority=85,
    ),
)


def get_sources(kind: Optional[SourceKind] = None) -> List[SourceConfig]:
    """Configured sources in merge order, optionally limited to one kind."""
    if kind is None:
        return list(SOURCES)
    return [source for source in SOURCES if source.kind == kind]


def source_names() -> List[str]:
    """Names of every configured source."""
    return [source.name for source in SOURCES]
