"""GraphQL episode models.

ZDF exposes six series-like collection types. Structurally each one either
pages its episodes directly or nests them inside seasons, so they collapse
into two variants of ``SeriesItem``.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from .common import ZdfModel

SERIES_TYPENAMES = frozenset({
    "SeasonSeriesSmartCollection",
    "DefaultNoSectionsSmartCollection",
    "MiniSeriesSmartCollection",
    "ISeriesSmartCollection",
    "DefaultWithSectionsSmartCollection",
    "EndlessSeriesSmartCollection",
})


class EpisodeInfo(ZdfModel):
    season_number: Optional[int] = None
    episode_number: Optional[int] = None


class Episode(ZdfModel):
    title: str = ""
    editorial_date: Optional[str] = None
    sharing_url: Optional[str] = None
    episode_info: Optional[EpisodeInfo] = None


class PageInfo(ZdfModel):
    has_next_page: bool = False
    end_cursor: Optional[str] = None


class EpisodeConnection(ZdfModel):
    nodes: List[Episode] = Field(default_factory=list)
    page_info: Optional[PageInfo] = None


class SeasonNode(ZdfModel):
    season_number: Optional[int] = None
    episodes: Optional[EpisodeConnection] = None


class DirectEpisodes(ZdfModel):
    kind: Literal["direct"] = "direct"
    typename: str
    title: str = ""
    episodes: EpisodeConnection


class SeasonedEpisodes(ZdfModel):
    kind: Literal["seasoned"] = "seasoned"
    typename: str
    title: str = ""
    seasons: List[SeasonNode] = Field(default_factory=list)


SeriesItem = Annotated[Union[DirectEpisodes, SeasonedEpisodes], Field(discriminator="kind")]

_series_item = TypeAdapter(SeriesItem)


def parse_series_item(raw: Dict[str, Any] | None) -> DirectEpisodes | SeasonedEpisodes | None:
    """Classify a raw ``searchDocuments`` item; ``None`` when it is not series-like."""
    if not raw or raw.get("__typename") not in SERIES_TYPENAMES:
        return None
    typename = raw["__typename"]
    title = raw.get("title") or ""
    episodes = raw.get("episodes") or {}
    if episodes.get("nodes"):
        return _series_item.validate_python(
            {"kind": "direct", "typename": typename, "title": title, "episodes": episodes}
        )
    seasons = (raw.get("seasons") or {}).get("nodes") or []
    return _series_item.validate_python(
        {"kind": "seasoned", "typename": typename, "title": title, "seasons": seasons}
    )
