from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional

from temporal_cache.core.harmonization.config import HarmonizationConfig
from temporal_cache.core.harmonization.harmonizer import harmonize
from temporal_cache.core.temporal.models import TemporalRecord
from temporal_cache.core.temporal.transitions import is_content, is_page, is_visible

_log = logging.getLogger("temporal_cache.content")


class ContentFilter(str, Enum):
    ALL = "all"
    PAGES = "pages"
    CONTENT = "content"
    ACTIVE = "active"
    SCHEDULED = "scheduled"
    EXPIRED = "expired"
    HARMONIZABLE = "harmonizable"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ContentFilter":
        # Unknown filters list everything.
        try:
            return cls((value or "all").strip().lower())
        except ValueError:
            _log.debug("Unknown content filter %r, using 'all'", value)
            return cls.ALL


def is_harmonizable(record: TemporalRecord, config: HarmonizationConfig, now: Optional[int] = None) -> bool:
    """
    A bound would move to a slot that lies within tolerance. With ``now``
    given, only bounds still ahead are considered.
    """
    if not config.enabled:
        return False
    for bound in (record.visible_from, record.visible_until):
        if bound is None or (now is not None and bound <= now):
            continue
        target = harmonize(bound, config)
        if target != bound and abs(target - bound) <= config.tolerance_seconds:
            return True
    return False


def matches(record: TemporalRecord, content_filter: ContentFilter, now: int, config: HarmonizationConfig) -> bool:
    if content_filter == ContentFilter.ALL:
        return True
    if content_filter == ContentFilter.PAGES:
        return is_page(record)
    if content_filter == ContentFilter.CONTENT:
        return is_content(record)
    if content_filter == ContentFilter.ACTIVE:
        return is_visible(record, now)
    if content_filter == ContentFilter.SCHEDULED:
        return record.visible_from is not None and record.visible_from > now
    if content_filter == ContentFilter.EXPIRED:
        return record.visible_until is not None and record.visible_until <= now
    if content_filter == ContentFilter.HARMONIZABLE:
        return is_harmonizable(record, config, now)
    raise ValueError(f"Unhandled content filter: {content_filter!r}")


def filter_records(
    records: Iterable[TemporalRecord],
    content_filter: ContentFilter,
    now: int,
    config: HarmonizationConfig,
) -> List[TemporalRecord]:
    return [r for r in records if matches(r, content_filter, now, config)]
