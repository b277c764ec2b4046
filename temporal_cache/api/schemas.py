from __future__ import annotations

import time
from typing import List, Optional

from pydantic import BaseModel, Field

from temporal_cache.core.temporal.models import TemporalRecord


def _now() -> int:
    return int(time.time())


class RecordIn(BaseModel):
    uid: int = Field(gt=0)
    table_name: str = "pages"
    label: str = ""
    container_id: int = 0
    visible_from: Optional[int] = None
    visible_until: Optional[int] = None
    locale_id: int = 0
    variant_id: int = 0
    hidden: bool = False
    deleted: bool = False

    def to_record(self) -> TemporalRecord:
        return TemporalRecord(**self.model_dump())


class RecordsRequest(BaseModel):
    records: List[RecordIn] = Field(default_factory=list)

    def to_records(self) -> List[TemporalRecord]:
        return [r.to_record() for r in self.records]


class NextTransitionRequest(RecordsRequest):
    now: int = Field(default_factory=_now)
    # Lifetime the caller would otherwise use; defaults to advanced.default_max_lifetime.
    lifetime: Optional[int] = Field(default=None, ge=0)


class TransitionWindowRequest(RecordsRequest):
    start: int
    end: int


class HarmonizeRequest(BaseModel):
    timestamp: int


class ImpactRequest(BaseModel):
    timestamps: List[int] = Field(default_factory=list)


class FilterRequest(RecordsRequest):
    filter: str = "all"
    now: int = Field(default_factory=_now)


class StatisticsRequest(RecordsRequest):
    now: int = Field(default_factory=_now)
    horizon: int = Field(default=86400, gt=0)
