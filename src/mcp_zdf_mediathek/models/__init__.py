from .broadcast import Broadcast, BroadcastSchedule, CurrentBroadcast
from .catalog import (
    Brand,
    BrandListing,
    BrandSummary,
    Season,
    SeasonListing,
    SeasonSummary,
    Series,
    SeriesListing,
    SeriesSummary,
)
from .common import PagedResult, ZdfModel
from .episodes import (
    SERIES_TYPENAMES,
    DirectEpisodes,
    Episode,
    EpisodeConnection,
    EpisodeInfo,
    PageInfo,
    SeasonedEpisodes,
    SeasonNode,
    SeriesItem,
    parse_series_item,
)
from .search import SearchDocument, SearchResponse, SearchResult

__all__ = [
    "Brand",
    "BrandListing",
    "BrandSummary",
    "Broadcast",
    "BroadcastSchedule",
    "CurrentBroadcast",
    "DirectEpisodes",
    "Episode",
    "EpisodeConnection",
    "EpisodeInfo",
    "PageInfo",
    "PagedResult",
    "SERIES_TYPENAMES",
    "SearchDocument",
    "SearchResponse",
    "SearchResult",
    "Season",
    "SeasonListing",
    "SeasonNode",
    "SeasonSummary",
    "SeasonedEpisodes",
    "Series",
    "SeriesItem",
    "SeriesListing",
    "SeriesSummary",
    "ZdfModel",
    "parse_series_item",
]
