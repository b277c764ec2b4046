from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from temporal_cache.core.harmonization.config import HarmonizationConfig
from temporal_cache.core.temporal.aggregator import next_transition_for, transitions_between
from temporal_cache.core.temporal.models import TemporalRecord, TransitionEvent
from temporal_cache.core.temporal.transitions import has_temporal_bounds

from .filters import ContentFilter, matches


@dataclass
class ContentStatistics:
    total: int
    pages: int
    content: int
    active: int
    scheduled: int
    expired: int
    with_bounds: int
    harmonizable: int
    next_transition: Optional[int]
    timeline: List[TransitionEvent] = field(default_factory=list)

    @property
    def transitions_in_horizon(self) -> int:
        return len(self.timeline)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "pages": self.pages,
            "content": self.content,
            "active": self.active,
            "scheduled": self.scheduled,
            "expired": self.expired,
            "with_bounds": self.with_bounds,
            "harmonizable": self.harmonizable,
            "next_transition": self.next_transition,
            "transitions_in_horizon": self.transitions_in_horizon,
            "timeline": [e.to_dict() for e in self.timeline],
        }


def content_statistics(
    records: Sequence[TemporalRecord],
    now: int,
    config: HarmonizationConfig,
    horizon: int = 86400,
) -> ContentStatistics:
    def count(f: ContentFilter) -> int:
        return sum(1 for r in records if matches(r, f, now, config))

    return ContentStatistics(
        total=len(records),
        pages=count(ContentFilter.PAGES),
        content=count(ContentFilter.CONTENT),
        active=count(ContentFilter.ACTIVE),
        scheduled=count(ContentFilter.SCHEDULED),
        expired=count(ContentFilter.EXPIRED),
        with_bounds=sum(1 for r in records if has_temporal_bounds(r)),
        harmonizable=count(ContentFilter.HARMONIZABLE),
        next_transition=next_transition_for(records, now),
        timeline=transitions_between(records, now, now + horizon),
    )
