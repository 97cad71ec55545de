from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from mcp_zdf_mediathek.client import ZdfMediathekClient
from mcp_zdf_mediathek.models import Broadcast
from mcp_zdf_mediathek.settings import get_settings

BERLIN = timezone(timedelta(hours=1))
NOW = datetime(2025, 12, 27, 20, 10, tzinfo=BERLIN)


@pytest.fixture
def client():
    """Upstream client double; every endpoint is an AsyncMock."""
    return AsyncMock(spec=ZdfMediathekClient)


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("ZDF_URL", "ZDF_CLIENT_ID", "ZDF_CLIENT_SECRET", "TIMEZONE", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_broadcast(title: str, begin: datetime, minutes: int = 30, tv_service: str = "ZDF") -> Broadcast:
    return Broadcast(
        airtime_begin=begin,
        airtime_end=begin + timedelta(minutes=minutes),
        duration=minutes * 60,
        tv_service=tv_service,
        title=title,
    )
