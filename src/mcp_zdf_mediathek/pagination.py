"""Opaque page/limit cursors and the per-endpoint "is there a next page?" policies.

Two cursor formats exist side by side and must never be mixed:

* ``EncodedCursor``: minted here, ``base64(json({"page": int, "limit": int|null}))``.
  Used by every REST-backed tool.
* ``GraphQLCursor``: the upstream's native ``endCursor``, handed to the caller
  verbatim and sent back as the GraphQL ``after`` variable.
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import NewType, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidCursorError

EncodedCursor = NewType("EncodedCursor", str)
GraphQLCursor = NewType("GraphQLCursor", str)


class LocalCursor(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    page: int = Field(default=1, ge=1, strict=True)
    limit: Optional[int] = Field(default=None, gt=0, strict=True)


class PageRequest(BaseModel):
    page: int
    limit: int


def encode_cursor(page: int, limit: int | None) -> EncodedCursor:
    raw = json.dumps({"page": page, "limit": limit}, separators=(",", ":")).encode("utf-8")
    return EncodedCursor(base64.b64encode(raw).decode("ascii"))


def decode_cursor(cursor: str) -> LocalCursor:
    try:
        raw = base64.b64decode(cursor.encode("ascii"), validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeError, binascii.Error, ValueError) as e:
        raise InvalidCursorError(data={"reason": str(e)}) from e
    if not isinstance(data, dict):
        raise InvalidCursorError(data={"reason": "cursor payload is not an object"})
    try:
        return LocalCursor.model_validate(data)
    except ValidationError as e:
        raise InvalidCursorError(data={"reason": e.errors(include_url=False)[0]["msg"]}) from e


def resolve_page(
    cursor: str | None,
    limit: int,
    *,
    cursor_limit_overrides: bool = True,
) -> PageRequest:
    """Turn the caller's limit and optional cursor into the upstream page request.

    Once paging has started the cursor is the source of truth for ``limit``,
    unless the tool pins the caller's limit (``cursor_limit_overrides=False``).
    """
    if cursor is None or not cursor.strip():
        return PageRequest(page=1, limit=limit)
    decoded = decode_cursor(cursor.strip())
    if cursor_limit_overrides and decoded.limit is not None:
        limit = decoded.limit
    return PageRequest(page=decoded.page, limit=limit)


def next_cursor_if_full_page(page: int, limit: int, returned: int) -> EncodedCursor | None:
    # best effort: a full page may be followed by an empty one
    if returned >= limit:
        return encode_cursor(page + 1, limit)
    return None


def next_cursor_for_brands(
    page: int,
    limit: int,
    returned: int,
    next_link: str | None,
) -> EncodedCursor | None:
    # the next-archive link is unreliable, so a full page also counts
    if next_link or returned == limit:
        return encode_cursor(page + 1, limit)
    return None
