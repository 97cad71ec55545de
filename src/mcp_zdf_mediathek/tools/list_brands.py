from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..client import ZdfMediathekClient
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import BrandSummary, PagedResult
from ..models.params import PagedParams
from ..pagination import next_cursor_for_brands, resolve_page

log = get_logger("mcp.zdf.tools.list_brands")

DEFAULT_LIMIT = 10

DESCRIPTION = """List all TV brands/series in the ZDF Mediathek.
Parameters: limit (optional, default: 10), cursor (optional, taken from a previous nextCursor).
Returns brands with uuid, brandName and brandDescription."""


async def list_brands(
    client: ZdfMediathekClient,
    limit: Optional[int] = DEFAULT_LIMIT,
    cursor: Optional[str] = None,
) -> PagedResult[BrandSummary]:
    try:
        params = PagedParams.parse(limit=DEFAULT_LIMIT if limit is None else limit, cursor=cursor)
        req = resolve_page(params.cursor, params.limit)
        log.info("MCP Tool 'list_brands' called", limit=req.limit, page=req.page)

        listing = await client.list_brands(req.limit, req.page)
        log.info("Brands retrieved", returned=len(listing.brands), has_next_link=bool(listing.next_archive))

        return PagedResult[BrandSummary](
            resources=[BrandSummary.from_brand(b) for b in listing.brands],
            next_cursor=next_cursor_for_brands(req.page, req.limit, len(listing.brands), listing.next_archive),
        )
    except InvalidInputError as e:
        log.warning("Invalid parameter for list_brands", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing list_brands")
        raise UpstreamError("list_brands", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient]) -> None:
    @mcp.tool(name="list_brands", description=DESCRIPTION)
    async def list_brands_tool(limit: Optional[int] = DEFAULT_LIMIT, cursor: Optional[str] = None) -> Dict[str, Any]:
        result = await list_brands(get_client(), limit=limit, cursor=cursor)
        return result.dump()
