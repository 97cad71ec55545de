from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..client import ZdfMediathekClient
from ..errors import InvalidInputError, UpstreamError
from ..logging import get_logger
from ..models import Broadcast, CurrentBroadcast
from ..models.params import CurrentBroadcastParams
from ..settings import Clock

log = get_logger("mcp.zdf.tools.current_broadcast")

DEFAULT_LIMIT = 10

DESCRIPTION = """Get the currently airing program on a specific ZDF channel.
Parameters:
- tv_service: Channel name (required, e.g., ZDF, ZDFneo, 3sat, ZDFinfo, PHOENIX, KIKA).
- limit: Maximum number of broadcasts to fetch from the API (default: 10).
Returns the current program with title, time, description and channel info,
or currentBroadcast = null when nothing is on air."""


def find_current(broadcasts: List[Broadcast], now) -> Optional[Broadcast]:
    return next((b for b in broadcasts if b.is_airing_at(now)), None)


async def get_current_broadcast(
    client: ZdfMediathekClient,
    clock: Clock,
    tv_service: str,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> CurrentBroadcast:
    log.info("MCP Tool 'get_current_broadcast' called", tv_service=tv_service, limit=limit)
    try:
        params = CurrentBroadcastParams.parse(
            tv_service=tv_service,
            limit=DEFAULT_LIMIT if limit is None else limit,
        )

        schedule = await client.current_broadcasts(params.tv_service, params.limit)
        log.debug("Received broadcasts from API", returned=len(schedule.broadcasts))

        queried_at = clock()
        current = find_current(schedule.broadcasts, queried_at)
        if current is not None:
            log.info(
                "Found current broadcast",
                title=current.title,
                tv_service=params.tv_service,
                started=current.airtime_begin.isoformat(),
            )
        else:
            log.info("No current broadcast found", tv_service=params.tv_service, at=queried_at.isoformat())

        return CurrentBroadcast(
            tv_service=params.tv_service,
            current_broadcast=current,
            queried_at=queried_at,
        )
    except InvalidInputError as e:
        log.error("Invalid parameter for get_current_broadcast", error=e.message)
        raise
    except Exception as e:
        log.exception("Error executing get_current_broadcast", tv_service=tv_service)
        raise UpstreamError("get_current_broadcast", e) from e


def register_tool(mcp: Any, get_client: Callable[[], ZdfMediathekClient], clock: Clock) -> None:
    @mcp.tool(name="get_current_broadcast", description=DESCRIPTION)
    async def get_current_broadcast_tool(
        tv_service: str,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> Dict[str, Any]:
        result = await get_current_broadcast(get_client(), clock, tv_service=tv_service, limit=limit)
        return result.model_dump(mode="json", by_alias=True)
