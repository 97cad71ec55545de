# EPG models for /cmdm/epg/broadcasts and /cmdm/epg/broadcasts/pf
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import ZdfModel

REL_BROADCASTS = "http://zdf.de/rels/cmdm/broadcasts"
REL_PROGRAMME_ITEM = "http://zdf.de/rels/cmdm/programme-item"


class Broadcast(ZdfModel):
    airtime_begin: datetime
    airtime_end: datetime
    duration: Optional[int] = None  # seconds
    tv_service: Optional[str] = None
    title: str = ""
    subtitle: Optional[str] = None
    text: Optional[str] = None
    programme_item: Optional[str] = Field(default=None, validation_alias=REL_PROGRAMME_ITEM)

    def is_airing_at(self, moment: datetime) -> bool:
        return self.airtime_begin <= moment < self.airtime_end


class BroadcastSchedule(ZdfModel):
    broadcasts: List[Broadcast] = Field(default_factory=list, validation_alias=REL_BROADCASTS)
    next_archive: Optional[str] = Field(default=None, validation_alias="next-archive")


class CurrentBroadcast(ZdfModel):
    tv_service: str
    current_broadcast: Optional[Broadcast] = None
    queried_at: datetime
