from __future__ import annotations

from typing import Any, Callable

from ..client import ZdfMediathekClient
from ..settings import Clock
from . import (
    broadcast_schedule,
    current_broadcast,
    list_brands,
    list_seasons,
    list_series,
    search_content,
    series_episodes,
)


def register_tools(mcp: Any, get_client: Callable[[], ZdfMediathekClient], clock: Clock) -> None:
    search_content.register_tool(mcp, get_client)
    broadcast_schedule.register_tool(mcp, get_client)
    current_broadcast.register_tool(mcp, get_client, clock)
    list_brands.register_tool(mcp, get_client)
    list_series.register_tool(mcp, get_client)
    list_seasons.register_tool(mcp, get_client)
    series_episodes.register_tool(mcp, get_client)


__all__ = ["register_tools"]
