from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..client import ZdfMediathekClient
from ..episodes import DEFAULT_SORT, build_episodes_query, build_variables, extract_episodes, first_item
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import Episode, PagedResult
from ..models.params import SeriesEpisodesParams
from ..pagination import GraphQLCursor

log = get_logger("mcp.zdf.tools.series_episodes")

DEFAULT_LIMIT = 10

DESCRIPTION = """Get episodes for a series.
Parameters:
- series_name (required): Name of the series to search for.
- limit (optional, default: 10): Maximum number of episodes to return.
- sort_by (optional, default: 'date_desc'): 'date_desc' (newest first), 'date_asc' (oldest first),
  'episode_desc' (highest episode number first), 'episode_asc' (lowest episode number first).
- cursor (optional): nextCursor of a previous call, passed back unchanged.
Series split into several seasons are returned in one page without nextCursor."""


async def get_series_episodes(
    client: ZdfMediathekClient,
    series_name: str,
    limit: Optional[int] = DEFAULT_LIMIT,
    sort_by: Optional[str] = DEFAULT_SORT,
    cursor: Optional[str] = None,
) -> PagedResult[Episode]:
    log.info(
        "MCP Tool 'get_series_episodes' called",
        series_name=series_name,
        limit=limit,
        sort_by=sort_by,
        cursor_present=bool(cursor),
    )
    try:
        params = SeriesEpisodesParams.parse(
            series_name=series_name,
            limit=DEFAULT_LIMIT if limit is None else limit,
            sort_by=sort_by,
            cursor=cursor,
        )
        # opaque upstream cursor, never run through decode_cursor
        after = GraphQLCursor(params.cursor) if params.cursor else None
        include_sort, variables = build_variables(params.series_name, params.limit, params.sort_by, after)

        data = await client.graphql(build_episodes_query(include_sort), variables)

        item = first_item(data)
        if item is None:
            log.info("No results found for series", series_name=params.series_name)
            return PagedResult[Episode](resources=[], next_cursor=None)

        episodes, next_cursor = extract_episodes(item)
        log.info("Episodes retrieved", series_name=params.series_name, returned=len(episodes))
        return PagedResult[Episode](resources=episodes, next_cursor=next_cursor)
    except InvalidInputError as e:
        log.error("Invalid parameter for get_series_episodes", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing get_series_episodes", series_name=series_name)
        raise UpstreamError("get_series_episodes", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient]) -> None:
    @mcp.tool(name="get_series_episodes", description=DESCRIPTION)
    async def get_series_episodes_tool(
        series_name: str,
        limit: Optional[int] = DEFAULT_LIMIT,
        sort_by: Optional[str] = DEFAULT_SORT,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        result = await get_series_episodes(
            get_client(), series_name=series_name, limit=limit, sort_by=sort_by, cursor=cursor
        )
        return result.dump()
