"""Validated tool parameters.

Tools accept flat arguments and normalise them into these models before any
upstream call; a validation failure becomes ``InvalidInputError`` carrying the
message of the failing check.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from ..errors import InvalidInputError

ISO_HINT = "must be in ISO 8601 format with timezone, e.g., 2025-12-27T00:00:00+01:00"


def _required(name: str, v: Any) -> str:
    if v is None or not str(v).strip():
        raise ValueError(f"Parameter '{name}' is required and must not be empty")
    return str(v).strip()


def parse_iso8601(name: str, v: str) -> datetime:
    text = v.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Parameter '{name}' {ISO_HINT}") from None
    if parsed.tzinfo is None:
        raise ValueError(f"Parameter '{name}' {ISO_HINT}")
    return parsed


class ToolParams(BaseModel):
    @classmethod
    def parse(cls, **values: Any):
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            err = e.errors(include_url=False)[0]
            cause = (err.get("ctx") or {}).get("error")
            if cause is not None:
                raise InvalidInputError(str(cause)) from e
            loc = ".".join(str(p) for p in err["loc"]) or "input"
            raise InvalidInputError(f"Parameter '{loc}': {err['msg']}") from e


class PagedParams(ToolParams):
    limit: int
    cursor: Optional[str] = None

    @field_validator("limit")
    @classmethod
    def _positive_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Parameter 'limit' must be greater than 0")
        return v

    @field_validator("cursor", mode="before")
    @classmethod
    def _blank_cursor(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        return v.strip() or None


class SearchContentParams(PagedParams):
    query: str

    @field_validator("query", mode="before")
    @classmethod
    def _query(cls, v: Optional[str]) -> str:
        return _required("query", v)


class BroadcastScheduleParams(PagedParams):
    from_time: str
    to_time: str
    tv_service: Optional[str] = None

    @field_validator("from_time", mode="before")
    @classmethod
    def _from(cls, v: Optional[str]) -> str:
        v = _required("from_time", v)
        parse_iso8601("from_time", v)
        return v

    @field_validator("to_time", mode="before")
    @classmethod
    def _to(cls, v: Optional[str]) -> str:
        v = _required("to_time", v)
        parse_iso8601("to_time", v)
        return v

    @field_validator("tv_service", mode="before")
    @classmethod
    def _tv_service(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        return v.strip() or None

    @model_validator(mode="after")
    def _ordered(self) -> "BroadcastScheduleParams":
        if parse_iso8601("from_time", self.from_time) >= parse_iso8601("to_time", self.to_time):
            raise ValueError("Parameter 'from_time' must be before 'to_time'")
        return self


class CurrentBroadcastParams(ToolParams):
    tv_service: str
    limit: int

    @field_validator("tv_service", mode="before")
    @classmethod
    def _tv_service(cls, v: Optional[str]) -> str:
        return _required("tv_service", v)

    @field_validator("limit")
    @classmethod
    def _positive_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Parameter 'limit' must be greater than 0")
        return v


class SeriesEpisodesParams(PagedParams):
    series_name: str
    sort_by: Optional[str] = None

    @field_validator("series_name", mode="before")
    @classmethod
    def _series_name(cls, v: Optional[str]) -> str:
        return _required("series_name", v)
