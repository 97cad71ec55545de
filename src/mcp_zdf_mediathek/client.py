"""Async client for the ZDF Mediathek REST and GraphQL API.

All calls go through one ``httpx.AsyncClient`` that authenticates with an
OAuth2 client-credentials bearer token. Every failure is raised as
``ZdfApiError`` with the underlying exception chained.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, AsyncGenerator, Callable, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .logging import get_logger
from .models import BrandListing, BroadcastSchedule, SearchResponse, SeasonListing, SeriesListing
from .settings import Settings

log = get_logger("mcp.zdf.client")

M = TypeVar("M", bound=BaseModel)


class ZdfApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ClientCredentialsAuth(httpx.Auth):
    """OAuth2 client-credentials flow as an httpx auth hook.

    Credentials travel in the form body (``client_secret_post``).

    The token is cached until ``leeway`` seconds before it expires and fetched
    again once if the API answers 401.
    """

    requires_response_body = True

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        *,
        leeway: float = 30.0,
        now: Callable[[], float] = time.monotonic,
    ):
        self.token_url = token_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._leeway = leeway
        self._now = now
        self._lock = asyncio.Lock()
        self._access_token: Optional[str] = None
        self._expires_at = 0.0

    def _token_request(self) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self._client_id,
                "client_secret": self._client_secret,
            },
            headers={"Accept": "application/json"},
        )

    def _store_token(self, response: httpx.Response) -> None:
        if response.status_code != 200:
            raise ZdfApiError(
                f"token request failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
            token = payload["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            raise ZdfApiError(f"token endpoint returned an unusable body: {e}") from e
        expires_in = float(payload.get("expires_in") or 0)
        self._access_token = token
        self._expires_at = self._now() + max(expires_in - self._leeway, 0.0)
        log.debug("oauth.token.acquired", expires_in=expires_in)

    def _is_valid(self) -> bool:
        return self._access_token is not None and self._now() < self._expires_at

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        async with self._lock:
            if not self._is_valid():
                token_response = yield self._token_request()
                self._store_token(token_response)
            token = self._access_token

        request.headers["Authorization"] = f"Bearer {token}"
        response = yield request

        if response.status_code == 401:
            log.info("oauth.token.rejected", url=str(request.url))
            async with self._lock:
                if self._access_token == token:
                    token_response = yield self._token_request()
                    self._store_token(token_response)
                token = self._access_token
            request.headers["Authorization"] = f"Bearer {token}"
            yield request


def _redacted(headers: httpx.Headers) -> Dict[str, str]:
    return {k: ("[REDACTED]" if k.lower() == "authorization" else v) for k, v in headers.items()}


async def _log_request(request: httpx.Request) -> None:
    log.debug("http.request", method=request.method, url=str(request.url), headers=_redacted(request.headers))


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    if response.is_error:
        log.error("http.response", method=request.method, url=str(request.url), status=response.status_code)
    else:
        log.debug("http.response", method=request.method, url=str(request.url), status=response.status_code)


class ZdfMediathekClient:
    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        auth: Optional[httpx.Auth] = None,
    ):
        self.settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
            headers={"accept": "application/json"},
            auth=auth or ClientCredentialsAuth(
                settings.token_url, settings.ZDF_CLIENT_ID, settings.ZDF_CLIENT_SECRET
            ),
            transport=transport,
            event_hooks={"request": [_log_request], "response": [_log_response]},
        )

    async def __aenter__(self) -> "ZdfMediathekClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---------- transport helpers ----------

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        what = f"{method} {path}"
        try:
            resp = await self._http.request(method, path, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ZdfApiError(
                f"{what} returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ZdfApiError(f"{what}: {e.__class__.__name__}: {e}") from e
        try:
            return resp.json()
        except ValueError as e:
            raise ZdfApiError(f"{what} did not return valid JSON: {e}") from e

    async def _get(self, path: str, model: Type[M], **params: Any) -> M:
        query = {k: v for k, v in params.items() if v is not None}
        data = await self._send("GET", path, params=query)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ZdfApiError(f"GET {path} returned an unexpected document: {e}") from e

    # ---------- REST endpoints ----------

    async def search_documents(self, query: str, limit: int, page: int = 1) -> SearchResponse:
        return await self._get("/search/documents", SearchResponse, q=query, limit=limit, page=page)

    async def broadcast_schedule(
        self,
        from_: str,
        to: str,
        tv_service: Optional[str],
        limit: int,
        page: int = 1,
    ) -> BroadcastSchedule:
        return await self._get(
            "/cmdm/epg/broadcasts",
            BroadcastSchedule,
            **{"from": from_, "to": to, "tvService": tv_service, "limit": limit, "page": page},
        )

    async def current_broadcasts(self, tv_service: Optional[str], limit: int) -> BroadcastSchedule:
        return await self._get("/cmdm/epg/broadcasts/pf", BroadcastSchedule, tvService=tv_service, limit=limit)

    async def list_brands(self, limit: int, page: int = 1) -> BrandListing:
        return await self._get("/cmdm/brands", BrandListing, limit=limit, page=page)

    async def list_series(self, limit: int, page: int = 1) -> SeriesListing:
        return await self._get("/cmdm/series", SeriesListing, limit=limit, page=page)

    async def list_seasons(self, limit: int, page: int = 1) -> SeasonListing:
        return await self._get("/cmdm/seasons", SeasonListing, limit=limit, page=page)

    # ---------- GraphQL ----------

    async def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL document and return its ``data`` object."""
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        result = await self._send("POST", "/graphql", json=payload)
        if not isinstance(result, dict):
            raise ZdfApiError("POST /graphql returned a non-object body")
        if result.get("errors"):
            msg = "; ".join(e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in result["errors"])
            raise ZdfApiError(f"GraphQL error: {msg}")
        return result.get("data") or {}
