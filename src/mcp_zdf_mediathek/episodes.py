"""Episode lookup through the ZDF GraphQL ``searchDocuments`` query.

A series name is resolved with ``first: $first`` against the catalog search; the
first hit, if series-like, carries its episodes either directly or per season.
Only the former (and a single season) keep native GraphQL paging.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .logging import get_logger
from .models import DirectEpisodes, Episode, PageInfo, parse_series_item
from .pagination import GraphQLCursor

log = get_logger("mcp.zdf.episodes")

DEFAULT_SORT = "date_desc"

SORT_OPTIONS: Dict[str, Tuple[str, str]] = {
    "date_desc": ("EDITORIAL_DATE", "DESC"),
    "date_asc": ("EDITORIAL_DATE", "ASC"),
    "episode_desc": ("EPISODE_NUMBER", "DESC"),
    "episode_asc": ("EPISODE_NUMBER", "ASC"),
}

# Collections that page their episodes directly.
_DIRECT_EPISODE_TYPES = (
    "DefaultNoSectionsSmartCollection",
    "DefaultWithSectionsSmartCollection",
    "MiniSeriesSmartCollection",
    "EndlessSeriesSmartCollection",
)

_EPISODE_SELECTION = """
    nodes {
      title
      editorialDate
      sharingUrl
      episodeInfo { seasonNumber episodeNumber }
    }
    pageInfo { hasNextPage endCursor }
"""


def build_episodes_query(include_sort: bool) -> str:
    """Build the ``GetSeriesEpisodes`` document, with or without the ``sortBy`` variable."""
    sort_var = ", $sortBy: [VideosConnectionSortByInput!]" if include_sort else ""
    sort_arg = ", sortBy: $sortBy" if include_sort else ""
    episodes_field = f"episodes(first: $first, after: $after{sort_arg}) {{{_EPISODE_SELECTION}}}"

    fragments = "".join(
        f"""
        ... on {typename} {{
          title
          {episodes_field}
        }}"""
        for typename in _DIRECT_EPISODE_TYPES
    )
    fragments += f"""
        ... on SeasonSeriesSmartCollection {{
          title
          seasons {{
            nodes {{
              seasonNumber
              {episodes_field}
            }}
          }}
        }}"""

    return f"""
query GetSeriesEpisodes($query: String!, $first: Int, $after: Cursor{sort_var}) {{
  searchDocuments(query: $query, first: $first) {{
    results {{
      item {{
        __typename{fragments}
      }}
    }}
  }}
}}
"""


def parse_sort_by(sort_by: Optional[str]) -> Tuple[str, str]:
    """Map a caller sort key to the GraphQL ``(field, direction)`` pair."""
    key = (sort_by or DEFAULT_SORT).strip().lower()
    if key not in SORT_OPTIONS:
        log.warning("Unknown sortBy value, defaulting", sort_by=sort_by, default=DEFAULT_SORT)
        key = DEFAULT_SORT
    return SORT_OPTIONS[key]


def build_variables(
    series_name: str,
    limit: int,
    sort_by: Optional[str],
    cursor: Optional[GraphQLCursor],
) -> Tuple[bool, Dict[str, Any]]:
    include_sort = bool(sort_by and sort_by.strip())
    variables: Dict[str, Any] = {"query": series_name, "first": limit}
    if include_sort:
        field, direction = parse_sort_by(sort_by)
        variables["sortBy"] = [{"field": field, "direction": direction}]
    if cursor:
        variables["after"] = cursor
    return include_sort, variables


def first_item(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    results = (data.get("searchDocuments") or {}).get("results") or []
    if not results:
        return None
    return (results[0] or {}).get("item")


def _cursor_from(page_info: Optional[PageInfo]) -> Optional[GraphQLCursor]:
    if page_info is not None and page_info.has_next_page and page_info.end_cursor:
        return GraphQLCursor(page_info.end_cursor)
    return None


def extract_episodes(raw_item: Optional[Dict[str, Any]]) -> Tuple[List[Episode], Optional[GraphQLCursor]]:
    """Pull the episode list and the native next cursor out of one search item.

    Several seasons are flattened in season order and lose paging: there is no
    single cursor spanning independently paged season connections.
    """
    item = parse_series_item(raw_item)
    if item is None:
        log.info("Item is not a series collection", typename=(raw_item or {}).get("__typename"))
        return [], None

    if isinstance(item, DirectEpisodes):
        return list(item.episodes.nodes), _cursor_from(item.episodes.page_info)

    if not item.seasons:
        return [], None
    if len(item.seasons) == 1:
        connection = item.seasons[0].episodes
        if connection is None:
            return [], None
        return list(connection.nodes), _cursor_from(connection.page_info)

    episodes = [ep for season in item.seasons if season.episodes for ep in season.episodes.nodes]
    return episodes, None
