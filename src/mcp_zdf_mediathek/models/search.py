# Full-text search models for /search/documents
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import ZdfModel

REL_SEARCH_RESULTS = "http://zdf.de/rels/search/results"
REL_TARGET = "http://zdf.de/rels/target"


class SearchDocument(ZdfModel):
    id: str = ""
    external_id: Optional[str] = None
    title: Optional[str] = None
    teasertext: Optional[str] = None
    editorial_date: Optional[datetime] = None
    content_type: Optional[str] = None
    has_video: bool = False
    web_canonical: Optional[str] = None  # link to the content on the web
    tv_service: Optional[str] = None
    end_date: Optional[datetime] = None


class SearchResult(ZdfModel):
    score: float = 0.0
    id: str = ""
    type: str = ""
    title: str = ""
    result_type: str = "default"
    target: Optional[SearchDocument] = Field(default=None, validation_alias=REL_TARGET)


class SearchResponse(ZdfModel):
    total_results_count: int = 0
    next: Optional[str] = None
    results: List[SearchResult] = Field(default_factory=list, validation_alias=REL_SEARCH_RESULTS)
