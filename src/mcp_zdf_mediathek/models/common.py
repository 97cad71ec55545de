from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ZdfModel(BaseModel):
    """Base for everything that mirrors ZDF JSON: camelCase on the wire, extras ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PagedResult(ZdfModel, Generic[T]):
    resources: List[T] = Field(default_factory=list)
    # EncodedCursor for REST-backed tools, GraphQLCursor for episodes
    next_cursor: Optional[str] = None

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
