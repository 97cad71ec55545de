from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..client import ZdfMediathekClient
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import PagedResult, SeriesSummary
from ..models.params import PagedParams
from ..pagination import next_cursor_if_full_page, resolve_page

log = get_logger("mcp.zdf.tools.list_series")

DEFAULT_LIMIT = 4

DESCRIPTION = """List all series available in the ZDF Mediathek.
Returns title, description, brand reference and external links (ZDF, IMDb if available).
Parameters: limit (optional, default: 4), cursor (optional, taken from a previous nextCursor)."""


async def list_series(
    client: ZdfMediathekClient,
    limit: Optional[int] = DEFAULT_LIMIT,
    cursor: Optional[str] = None,
) -> PagedResult[SeriesSummary]:
    try:
        params = PagedParams.parse(limit=DEFAULT_LIMIT if limit is None else limit, cursor=cursor)
        req = resolve_page(params.cursor, params.limit)
        log.info("MCP Tool 'list_series' called", limit=req.limit, page=req.page)

        listing = await client.list_series(req.limit, req.page)
        log.info("Series retrieved", returned=len(listing.series))

        return PagedResult[SeriesSummary](
            resources=[SeriesSummary.from_series(s) for s in listing.series],
            next_cursor=next_cursor_if_full_page(req.page, req.limit, len(listing.series)),
        )
    except InvalidInputError as e:
        log.warning("Invalid parameter for list_series", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing list_series")
        raise UpstreamError("list_series", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient]) -> None:
    @mcp.tool(name="list_series", description=DESCRIPTION)
    async def list_series_tool(limit: Optional[int] = DEFAULT_LIMIT, cursor: Optional[str] = None) -> Dict[str, Any]:
        result = await list_series(get_client(), limit=limit, cursor=cursor)
        return result.dump()
