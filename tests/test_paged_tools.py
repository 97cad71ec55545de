from datetime import datetime, timedelta, timezone

import pytest

from mcp_zdf_mediathek.client import ZdfApiError
from mcp_zdf_mediathek.errors import InvalidCursorError, InvalidInputError, UpstreamError
from mcp_zdf_mediathek.models import (
    Brand,
    BrandListing,
    BroadcastSchedule,
    SearchResponse,
    SearchResult,
    Season,
    SeasonListing,
    Series,
    SeriesListing,
)
from mcp_zdf_mediathek.pagination import LocalCursor, decode_cursor, encode_cursor
from mcp_zdf_mediathek.tools.broadcast_schedule import get_broadcast_schedule
from mcp_zdf_mediathek.tools.list_brands import list_brands
from mcp_zdf_mediathek.tools.list_seasons import list_seasons
from mcp_zdf_mediathek.tools.list_series import list_series
from mcp_zdf_mediathek.tools.search_content import search_content
from mcp_zdf_mediathek.tools.series_episodes import get_series_episodes

from .conftest import make_broadcast

FROM = "2025-12-27T00:00:00+01:00"
TO = "2025-12-27T23:59:59+01:00"


def search_results(n):
    return [SearchResult(id=f"id-{i}", title=f"tagesschau {i}", type="page-video") for i in range(n)]


# ---------- search_content ----------

@pytest.mark.asyncio
async def test_search_content_full_page_offers_next_cursor(client):
    client.search_documents.return_value = SearchResponse(
        total_results_count=3104,
        next="/search/documents?q=Tagesschau&limit=2&page=2",
        results=search_results(2),
    )

    result = await search_content(client, query="Tagesschau", limit=2)

    client.search_documents.assert_awaited_once_with("Tagesschau", 2, 1)
    assert len(result.resources) == 2
    assert decode_cursor(result.next_cursor) == LocalCursor(page=2, limit=2)


@pytest.mark.asyncio
async def test_search_content_short_page_ends_paging(client):
    client.search_documents.return_value = SearchResponse(total_results_count=3, results=search_results(3))

    result = await search_content(client, query="Tagesschau", limit=5)

    assert result.next_cursor is None


@pytest.mark.asyncio
async def test_search_content_keeps_requested_limit_across_pages(client):
    client.search_documents.return_value = SearchResponse(results=search_results(5))

    result = await search_content(client, query="Tagesschau", limit=5, cursor=encode_cursor(2, 10))

    client.search_documents.assert_awaited_once_with("Tagesschau", 5, 2)
    assert decode_cursor(result.next_cursor) == LocalCursor(page=3, limit=5)


@pytest.mark.asyncio
async def test_search_content_blank_query_fails_before_upstream(client):
    with pytest.raises(InvalidInputError, match="Parameter 'query' is required and must not be empty"):
        await search_content(client, query="   ")
    client.search_documents.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_content_invalid_cursor(client):
    with pytest.raises(InvalidCursorError):
        await search_content(client, query="Tagesschau", cursor="not-base64!!")
    client.search_documents.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_content_upstream_failure_is_not_an_empty_page(client):
    client.search_documents.side_effect = ZdfApiError("GET /search/documents returned HTTP 500", status_code=500)

    with pytest.raises(UpstreamError) as exc:
        await search_content(client, query="Tagesschau")

    assert exc.value.message == "search_content failed: GET /search/documents returned HTTP 500"
    assert isinstance(exc.value.cause, ZdfApiError)
    assert not isinstance(exc.value, InvalidInputError)


# ---------- get_broadcast_schedule ----------

@pytest.mark.asyncio
async def test_broadcast_schedule_full_page(client):
    start = datetime(2025, 12, 27, 18, 0, tzinfo=timezone(timedelta(hours=1)))
    client.broadcast_schedule.return_value = BroadcastSchedule(
        broadcasts=[make_broadcast(f"b{i}", start + timedelta(minutes=30 * i)) for i in range(3)]
    )

    result = await get_broadcast_schedule(client, from_time=FROM, to_time=TO, tv_service="ZDF", limit=3)

    client.broadcast_schedule.assert_awaited_once_with(FROM, TO, "ZDF", 3, 1)
    assert [b.title for b in result.resources] == ["b0", "b1", "b2"]
    assert decode_cursor(result.next_cursor) == LocalCursor(page=2, limit=3)


@pytest.mark.asyncio
async def test_broadcast_schedule_cursor_overrides_limit(client):
    client.broadcast_schedule.return_value = BroadcastSchedule(broadcasts=[])

    result = await get_broadcast_schedule(client, from_time=FROM, to_time=TO, limit=5, cursor=encode_cursor(2, 10))

    client.broadcast_schedule.assert_awaited_once_with(FROM, TO, None, 10, 2)
    assert result.next_cursor is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "from_time,to_time,message",
    [
        ("", TO, "Parameter 'from_time' is required and must not be empty"),
        (FROM, "  ", "Parameter 'to_time' is required and must not be empty"),
        ("27.12.2025 00:00", TO, "Parameter 'from_time' must be in ISO 8601 format with timezone"),
        ("2025-12-27T00:00:00", TO, "Parameter 'from_time' must be in ISO 8601 format with timezone"),
        (TO, FROM, "Parameter 'from_time' must be before 'to_time'"),
        (FROM, FROM, "Parameter 'from_time' must be before 'to_time'"),
    ],
)
async def test_broadcast_schedule_rejects_bad_time_range(client, from_time, to_time, message):
    with pytest.raises(InvalidInputError, match=message):
        await get_broadcast_schedule(client, from_time=from_time, to_time=to_time)
    client.broadcast_schedule.assert_not_awaited()


@pytest.mark.asyncio
async def test_broadcast_schedule_accepts_utc_designator(client):
    client.broadcast_schedule.return_value = BroadcastSchedule(broadcasts=[])

    await get_broadcast_schedule(client, from_time="2025-12-27T00:00:00Z", to_time="2025-12-27T06:00:00Z")

    client.broadcast_schedule.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -1])
async def test_broadcast_schedule_rejects_non_positive_limit(client, limit):
    with pytest.raises(InvalidInputError, match="Parameter 'limit' must be greater than 0"):
        await get_broadcast_schedule(client, from_time=FROM, to_time=TO, limit=limit)


# ---------- list_brands ----------

@pytest.mark.asyncio
async def test_list_brands_next_link_without_full_page(client):
    client.list_brands.return_value = BrandListing(
        brands=[Brand(uuid="b-1", brand_name="Terra X")],
        next_archive="/cmdm/brands?limit=10&page=2",
    )

    result = await list_brands(client)

    client.list_brands.assert_awaited_once_with(10, 1)
    assert result.resources[0].brand_name == "Terra X"
    assert decode_cursor(result.next_cursor) == LocalCursor(page=2, limit=10)


@pytest.mark.asyncio
async def test_list_brands_full_page_without_link(client):
    client.list_brands.return_value = BrandListing(
        brands=[Brand(uuid=f"b-{i}", brand_name=f"Brand {i}") for i in range(2)]
    )

    result = await list_brands(client, limit=2)

    assert decode_cursor(result.next_cursor) == LocalCursor(page=2, limit=2)


@pytest.mark.asyncio
async def test_list_brands_last_page(client):
    client.list_brands.return_value = BrandListing(brands=[Brand(uuid="b-1", brand_name="Terra X")])

    result = await list_brands(client, limit=2, cursor=encode_cursor(3, None))

    client.list_brands.assert_awaited_once_with(2, 3)
    assert result.next_cursor is None


# ---------- list_series / list_seasons ----------

@pytest.mark.asyncio
async def test_list_series_cursor_overrides_caller_limit(client):
    client.list_series.return_value = SeriesListing(
        series=[Series(series_uuid=f"s-{i}", series_title=f"Series {i}") for i in range(10)]
    )

    result = await list_series(client, limit=5, cursor=encode_cursor(2, 10))

    client.list_series.assert_awaited_once_with(10, 2)
    assert len(result.resources) == 10
    assert decode_cursor(result.next_cursor) == LocalCursor(page=3, limit=10)


@pytest.mark.asyncio
async def test_list_series_default_limit_and_short_page(client):
    client.list_series.return_value = SeriesListing(series=[Series(series_uuid="s-1", series_title="Der Alte")])

    result = await list_series(client)

    client.list_series.assert_awaited_once_with(4, 1)
    assert result.resources[0].title == "Der Alte"
    assert result.next_cursor is None


@pytest.mark.asyncio
async def test_list_seasons_full_page(client):
    client.list_seasons.return_value = SeasonListing(
        seasons=[Season(season_uuid=f"se-{i}", season_number=i, season_title=f"Staffel {i}") for i in range(4)]
    )

    result = await list_seasons(client)

    client.list_seasons.assert_awaited_once_with(4, 1)
    assert [s.season_number for s in result.resources] == [0, 1, 2, 3]
    assert decode_cursor(result.next_cursor) == LocalCursor(page=2, limit=4)


@pytest.mark.asyncio
async def test_list_seasons_invalid_cursor_is_invalid_input(client):
    with pytest.raises(InvalidInputError):
        await list_seasons(client, cursor="eyJwYWdlIjoidHdvIn0=")  # {"page":"two"}
    client.list_seasons.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_seasons_upstream_failure(client):
    client.list_seasons.side_effect = ZdfApiError("GET /cmdm/seasons: ConnectError: refused")

    with pytest.raises(UpstreamError, match="list_seasons failed"):
        await list_seasons(client)


@pytest.mark.asyncio
async def test_paged_result_dump_uses_wire_names(client):
    client.list_brands.return_value = BrandListing(brands=[Brand(uuid="b-1", brand_name="Terra X")])

    dumped = (await list_brands(client, limit=1)).dump()

    assert set(dumped) == {"resources", "nextCursor"}
    assert dumped["resources"] == [{"uuid": "b-1", "brandName": "Terra X", "brandDescription": None}]


# ---------- shared parameter validation ----------

PAGED_TOOLS = [
    (search_content, "search_documents", {"query": "Tagesschau"}),
    (list_brands, "list_brands", {}),
    (list_series, "list_series", {}),
    (list_seasons, "list_seasons", {}),
    (get_series_episodes, "graphql", {"series_name": "Terra X"}),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("tool,upstream,kwargs", PAGED_TOOLS)
@pytest.mark.parametrize("limit", [0, -5])
async def test_every_paged_tool_rejects_non_positive_limit(client, tool, upstream, kwargs, limit):
    with pytest.raises(InvalidInputError, match="Parameter 'limit' must be greater than 0"):
        await tool(client, limit=limit, **kwargs)
    getattr(client, upstream).assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("tool,upstream,kwargs", PAGED_TOOLS)
async def test_non_string_cursor_is_invalid_input(client, tool, upstream, kwargs):
    with pytest.raises(InvalidInputError, match="Parameter 'cursor'") as exc:
        await tool(client, cursor=123, **kwargs)
    assert not isinstance(exc.value, UpstreamError)
    getattr(client, upstream).assert_not_awaited()


@pytest.mark.asyncio
async def test_broadcast_schedule_non_string_tv_service_is_invalid_input(client):
    with pytest.raises(InvalidInputError, match="Parameter 'tv_service'"):
        await get_broadcast_schedule(client, from_time=FROM, to_time=TO, tv_service=5)
    client.broadcast_schedule.assert_not_awaited()
