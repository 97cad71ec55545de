from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..client import ZdfMediathekClient
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import PagedResult, SearchResult
from ..models.params import SearchContentParams
from ..pagination import next_cursor_if_full_page, resolve_page

log = get_logger("mcp.zdf.tools.search_content")

DEFAULT_LIMIT = 5

DESCRIPTION = """Search for content in the ZDF Mediathek.
Parameters:
- query: The search query string.
- limit: Maximum number of results to return (default: 5).
- cursor: Optional pagination cursor taken from a previous nextCursor.
The field 'webCanonical' of each result target contains the URL to the content.
Returns a paged result {resources, nextCursor}."""


async def search_content(
    client: ZdfMediathekClient,
    query: str,
    limit: Optional[int] = DEFAULT_LIMIT,
    cursor: Optional[str] = None,
) -> PagedResult[SearchResult]:
    log.info("MCP Tool 'search_content' called", query=query, limit=limit, cursor_present=bool(cursor))
    try:
        params = SearchContentParams.parse(
            query=query,
            limit=DEFAULT_LIMIT if limit is None else limit,
            cursor=cursor,
        )
        # the caller's limit stays fixed across pages
        req = resolve_page(params.cursor, params.limit, cursor_limit_overrides=False)

        log.debug("Calling ZDF API to search documents", limit=req.limit, page=req.page)
        response = await client.search_documents(params.query, req.limit, req.page)
        log.info(
            "Search results retrieved",
            query=params.query,
            returned=len(response.results),
            total=response.total_results_count,
        )

        return PagedResult[SearchResult](
            resources=response.results,
            next_cursor=next_cursor_if_full_page(req.page, params.limit, len(response.results)),
        )
    except InvalidInputError as e:
        log.error("Invalid parameter for search_content", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing search_content", query=query)
        raise UpstreamError("search_content", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient]) -> None:
    @mcp.tool(name="search_content", description=DESCRIPTION)
    async def search_content_tool(
        query: str,
        limit: Optional[int] = DEFAULT_LIMIT,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        result = await search_content(get_client(), query=query, limit=limit, cursor=cursor)
        return result.dump()
