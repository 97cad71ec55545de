from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..client import ZdfMediathekClient
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import PagedResult, SeasonSummary
from ..models.params import PagedParams
from ..pagination import next_cursor_if_full_page, resolve_page

log = get_logger("mcp.zdf.tools.list_seasons")

DEFAULT_LIMIT = 4

DESCRIPTION = """List all seasons available in the ZDF Mediathek.
Returns title, season number and full series details.
Parameters: limit (optional, default: 4), cursor (optional, taken from a previous nextCursor)."""


async def list_seasons(
    client: ZdfMediathekClient,
    limit: Optional[int] = DEFAULT_LIMIT,
    cursor: Optional[str] = None,
) -> PagedResult[SeasonSummary]:
    try:
        params = PagedParams.parse(limit=DEFAULT_LIMIT if limit is None else limit, cursor=cursor)
        req = resolve_page(params.cursor, params.limit)
        log.info("MCP Tool 'list_seasons' called", limit=req.limit, page=req.page)

        listing = await client.list_seasons(req.limit, req.page)
        log.info("Seasons retrieved", returned=len(listing.seasons))

        return PagedResult[SeasonSummary](
            resources=[SeasonSummary.from_season(s) for s in listing.seasons],
            next_cursor=next_cursor_if_full_page(req.page, req.limit, len(listing.seasons)),
        )
    except InvalidInputError as e:
        log.warning("Invalid parameter for list_seasons", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing list_seasons")
        raise UpstreamError("list_seasons", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient]) -> None:
    @mcp.tool(name="list_seasons", description=DESCRIPTION)
    async def list_seasons_tool(limit: Optional[int] = DEFAULT_LIMIT, cursor: Optional[str] = None) -> Dict[str, Any]:
        result = await list_seasons(get_client(), limit=limit, cursor=cursor)
        return result.dump()
