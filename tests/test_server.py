import pytest

from mcp_zdf_mediathek.server import SERVER_NAME, create_server

TOOLS = {
    "search_content": {"query", "limit", "cursor"},
    "get_broadcast_schedule": {"from_time", "to_time", "tv_service", "limit", "cursor"},
    "get_current_broadcast": {"tv_service", "limit"},
    "list_brands": {"limit", "cursor"},
    "list_series": {"limit", "cursor"},
    "list_seasons": {"limit", "cursor"},
    "get_series_episodes": {"series_name", "limit", "sort_by", "cursor"},
}


@pytest.mark.asyncio
async def test_all_tools_are_registered(client, clock):
    mcp = create_server(client_provider=lambda: client, clock=clock)

    tools = {t.name: t for t in await mcp.list_tools()}

    assert mcp.name == SERVER_NAME
    assert set(tools) == set(TOOLS)
    for name, params in TOOLS.items():
        assert set(tools[name].inputSchema["properties"]) == params
        assert tools[name].description


@pytest.mark.asyncio
async def test_required_arguments(client, clock):
    mcp = create_server(client_provider=lambda: client, clock=clock)

    tools = {t.name: t for t in await mcp.list_tools()}

    assert set(tools["get_broadcast_schedule"].inputSchema["required"]) == {"from_time", "to_time"}
    assert tools["get_current_broadcast"].inputSchema["required"] == ["tv_service"]
    assert "required" not in tools["list_brands"].inputSchema or not tools["list_brands"].inputSchema["required"]


def test_importing_server_does_not_build_client():
    import mcp_zdf_mediathek.server as server

    assert server.mcp.name == SERVER_NAME
    assert server._client is None
