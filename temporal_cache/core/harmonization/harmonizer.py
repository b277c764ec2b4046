"""
Slot harmonization.

An instant is snapped to the nearest configured time-of-day slot so that many
independent transitions share a small number of cache-invalidation moments.
Days are split at UTC midnight. Candidates for every slot are generated on the
previous, current and next day so instants close to midnight can snap across
the day boundary.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from temporal_cache.core.temporal.models import TemporalRecord

from .config import SECONDS_PER_DAY, HarmonizationConfig

_log = logging.getLogger("temporal_cache.harmonization")


def _nearest_slot(instant: int, config: HarmonizationConfig) -> int:
    midnight = instant - instant % SECONDS_PER_DAY

    # Chronological order; min() keeps the first of equally near candidates.
    candidates = [
        midnight + day_offset + slot
        for day_offset in (-SECONDS_PER_DAY, 0, SECONDS_PER_DAY)
        for slot in config.slots
    ]
    return min(candidates, key=lambda c: abs(c - instant))


def harmonize(instant: int, config: HarmonizationConfig) -> int:
    """
    Return the slot instant nearest to ``instant``; ties go to the earlier one.

    Raises ConfigurationDisabled when harmonization is off and
    InvalidConfiguration for unusable slot or tolerance settings.
    """
    config.require_usable()
    result = _nearest_slot(int(instant), config)
    _log.debug("harmonized %d -> %d", instant, result)
    return result


def distance_to_slot(instant: int, config: HarmonizationConfig) -> int:
    return abs(harmonize(instant, config) - int(instant))


def is_within_tolerance(instant: int, config: HarmonizationConfig) -> bool:
    return distance_to_slot(instant, config) <= config.tolerance_seconds


@dataclass(frozen=True)
class HarmonizationSuggestion:
    uid: int
    table_name: str
    visible_from: Optional[int]
    visible_until: Optional[int]
    harmonized_from: Optional[int]
    harmonized_until: Optional[int]
    within_tolerance: bool

    @property
    def changed(self) -> bool:
        return self.visible_from != self.harmonized_from or self.visible_until != self.harmonized_until

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "table_name": self.table_name,
            "visible_from": self.visible_from,
            "visible_until": self.visible_until,
            "harmonized_from": self.harmonized_from,
            "harmonized_until": self.harmonized_until,
            "changed": self.changed,
            "within_tolerance": self.within_tolerance,
        }


def suggest_for_record(record: TemporalRecord, config: HarmonizationConfig) -> HarmonizationSuggestion:
    config.require_usable()

    within = True
    harmonized = []
    for bound in (record.visible_from, record.visible_until):
        if bound is None:
            harmonized.append(None)
            continue
        target = harmonize(bound, config)
        if target != bound and abs(target - bound) > config.tolerance_seconds:
            within = False
        harmonized.append(target)

    return HarmonizationSuggestion(
        uid=record.uid,
        table_name=record.table_name,
        visible_from=record.visible_from,
        visible_until=record.visible_until,
        harmonized_from=harmonized[0],
        harmonized_until=harmonized[1],
        within_tolerance=within,
    )
