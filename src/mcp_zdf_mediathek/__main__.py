from __future__ import annotations

import os
import sys

from .logging import get_logger
from .server import mcp
from .settings import get_settings


def main() -> None:
    """
    Run the ZDF Mediathek MCP server using the official SDK runner.

    Examples:
      # stdio (default; Claude Desktop, MCP Inspector)
      ZDF_CLIENT_ID=... ZDF_CLIENT_SECRET=... python -m mcp_zdf_mediathek

      # streamable HTTP at 0.0.0.0:8080 mounted at /mcp
      MCP_TRANSPORT=streamable-http MCP_PORT=8080 python -m mcp_zdf_mediathek

      # optional stateless JSON for curl tests (not for production):
      # MCP_STATELESS_JSON=true
    """
    if any(a in ("-h", "--help") for a in sys.argv[1:]):
        sys.stderr.write("mcp-zdf-mediathek: MCP server for the ZDF Mediathek API.\n")
        sys.stderr.flush()
        return

    settings = get_settings()
    settings.validate_credentials()
    log = get_logger(os.getenv("SERVICE_NAME", "mcp.zdf.mediathek"))

    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()
    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8080"))

    mcp.settings.host = host
    mcp.settings.port = port

    if transport == "streamable-http":
        mcp.settings.streamable_http_path = os.getenv("MCP_MOUNT_PATH", "/mcp")
    elif transport == "sse":
        mcp.settings.sse_path = os.getenv("MCP_SSE_PATH", "/sse")

    if os.getenv("MCP_STATELESS_JSON", "").lower() in {"1", "true", "yes"}:
        mcp.settings.stateless_http = True
        mcp.settings.json_response = True

    log.info(
        "server.start",
        transport=transport,
        host=host,
        port=port,
        zdf_url=settings.base_url,
        timezone=settings.TIMEZONE,
    )
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
