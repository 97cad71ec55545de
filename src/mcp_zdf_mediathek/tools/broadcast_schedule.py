from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..client import ZdfMediathekClient
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import Broadcast, PagedResult
from ..models.params import BroadcastScheduleParams
from ..pagination import next_cursor_if_full_page, resolve_page

log = get_logger("mcp.zdf.tools.broadcast_schedule")

DEFAULT_LIMIT = 10

DESCRIPTION = """Get the TV broadcast schedule for ZDF channels within a specific time range.
Parameters:
- from_time: Start time in ISO 8601 format with timezone (e.g., 2025-12-27T00:00:00+01:00)
- to_time: End time in ISO 8601 format with timezone (e.g., 2025-12-27T23:59:59+01:00)
- tv_service: Optional channel name (e.g., ZDF, ZDFneo, 3sat). If omitted, returns all channels.
- limit: Maximum number of broadcasts to return (default: 10).
- cursor: Optional pagination cursor taken from a previous nextCursor.
Returns a paged result with broadcasts and an optional nextCursor."""


async def get_broadcast_schedule(
    client: ZdfMediathekClient,
    from_time: str,
    to_time: str,
    tv_service: Optional[str] = None,
    limit: Optional[int] = DEFAULT_LIMIT,
    cursor: Optional[str] = None,
) -> PagedResult[Broadcast]:
    log.info(
        "MCP Tool 'get_broadcast_schedule' called",
        from_time=from_time,
        to_time=to_time,
        tv_service=tv_service or "all",
        limit=limit,
        cursor_present=bool(cursor),
    )
    try:
        params = BroadcastScheduleParams.parse(
            from_time=from_time,
            to_time=to_time,
            tv_service=tv_service,
            limit=DEFAULT_LIMIT if limit is None else limit,
            cursor=cursor,
        )
        req = resolve_page(params.cursor, params.limit)

        log.debug("Calling ZDF API to get broadcast schedule", limit=req.limit, page=req.page)
        response = await client.broadcast_schedule(
            params.from_time, params.to_time, params.tv_service, req.limit, req.page
        )
        log.info(
            "Broadcasts retrieved",
            returned=len(response.broadcasts),
            from_time=params.from_time,
            to_time=params.to_time,
        )

        # no total count for EPG queries: a full page suggests more
        return PagedResult[Broadcast](
            resources=response.broadcasts,
            next_cursor=next_cursor_if_full_page(req.page, req.limit, len(response.broadcasts)),
        )
    except InvalidInputError as e:
        log.error("Invalid parameter for get_broadcast_schedule", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing get_broadcast_schedule", from_time=from_time, to_time=to_time)
        raise UpstreamError("get_broadcast_schedule", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient]) -> None:
    @mcp.tool(name="get_broadcast_schedule", description=DESCRIPTION)
    async def get_broadcast_schedule_tool(
        from_time: str,
        to_time: str,
        tv_service: Optional[str] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        result = await get_broadcast_schedule(
            get_client(),
            from_time=from_time,
            to_time=to_time,
            tv_service=tv_service,
            limit=limit,
            cursor=cursor,
        )
        return result.dump()
