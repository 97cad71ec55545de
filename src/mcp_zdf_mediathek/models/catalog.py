"""Brand, series and season models for the /cmdm listing endpoints.

The raw models mirror the HAL+JSON documents returned by ZDF; the ``*Summary``
models are what the MCP tools hand back to the caller.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .common import ZdfModel

REL_BRAND = "http://zdf.de/rels/cmdm/brand"
REL_BRANDS = "http://zdf.de/rels/cmdm/brands"
REL_SERIES = "http://zdf.de/rels/cmdm/series"
REL_SEASONS = "http://zdf.de/rels/cmdm/seasons"

ZDF_WEB_BASE = "https://www.zdf.de"


class Brand(ZdfModel):
    uuid: str = ""
    brand_name: str = ""
    brand_description: Optional[str] = None


class BrandListing(ZdfModel):
    brands: List[Brand] = Field(default_factory=list, validation_alias=REL_BRANDS)
    next_archive: Optional[str] = Field(default=None, validation_alias="next-archive")


class BrandReference(ZdfModel):
    brand_uuid: Optional[str] = None


class Series(ZdfModel):
    series_uuid: str = ""
    series_title: str = ""
    series_description: Optional[str] = None
    series_imdb_id: Optional[str] = None
    series_index_page_id: Optional[str] = None
    brand: Optional[BrandReference] = Field(default=None, validation_alias=REL_BRAND)


class SeriesListing(ZdfModel):
    series: List[Series] = Field(default_factory=list, validation_alias=REL_SERIES)


class Season(ZdfModel):
    season_uuid: str = ""
    season_number: Optional[int] = None
    season_title: str = ""
    series: Optional[Series] = Field(default=None, validation_alias=REL_SERIES)
    brand: Optional[BrandReference] = Field(default=None, validation_alias=REL_BRAND)


class SeasonListing(ZdfModel):
    seasons: List[Season] = Field(default_factory=list, validation_alias=REL_SEASONS)


class BrandSummary(ZdfModel):
    uuid: str
    brand_name: str
    brand_description: Optional[str] = None

    @classmethod
    def from_brand(cls, brand: Brand) -> "BrandSummary":
        return cls(uuid=brand.uuid, brand_name=brand.brand_name, brand_description=brand.brand_description)


class SeriesSummary(ZdfModel):
    series_uuid: str
    title: str
    description: Optional[str] = None
    brand_id: Optional[str] = None
    imdb_url: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_series(cls, series: Series) -> "SeriesSummary":
        return cls(
            series_uuid=series.series_uuid,
            title=series.series_title,
            description=series.series_description,
            brand_id=series.brand.brand_uuid if series.brand else None,
            imdb_url=series.series_imdb_id,
            url=f"{ZDF_WEB_BASE}/{series.series_index_page_id}" if series.series_index_page_id else None,
        )


class SeasonSummary(ZdfModel):
    season_uuid: str
    season_number: Optional[int] = None
    title: str
    series: Optional[SeriesSummary] = None
    brand_id: Optional[str] = None

    @classmethod
    def from_season(cls, season: Season) -> "SeasonSummary":
        brand_id = season.brand.brand_uuid if season.brand else None
        if brand_id is None and season.series and season.series.brand:
            brand_id = season.series.brand.brand_uuid
        return cls(
            season_uuid=season.season_uuid,
            season_number=season.season_number,
            title=season.season_title,
            series=SeriesSummary.from_series(season.series) if season.series else None,
            brand_id=brand_id,
        )
