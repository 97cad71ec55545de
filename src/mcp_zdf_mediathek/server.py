from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from mcp.server.fastmcp import FastMCP

from .client import ZdfMediathekClient
from .settings import Clock, get_settings
from .tools import register_tools

SERVER_NAME = "zdf-mediathek"

_client: Optional[ZdfMediathekClient] = None


def get_client() -> ZdfMediathekClient:
    """Shared upstream client, built from settings on first use."""
    global _client
    if _client is None:
        _client = ZdfMediathekClient(get_settings())
    return _client


def now() -> datetime:
    return get_settings().clock()()


def create_server(
    client_provider: Optional[Callable[[], ZdfMediathekClient]] = None,
    clock: Optional[Clock] = None,
) -> FastMCP:
    mcp = FastMCP(SERVER_NAME)
    register_tools(mcp, client_provider or get_client, clock or now)
    return mcp


# Single instance picked up by the SDK runner (__main__.py).
mcp = create_server()
