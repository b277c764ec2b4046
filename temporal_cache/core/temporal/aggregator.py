from __future__ import annotations

from typing import Iterable, List, Optional

from .models import TemporalRecord, TransitionEvent
from .transitions import next_transition, record_bounds


def next_transition_for(records: Iterable[TemporalRecord], now: int) -> Optional[int]:
    """Nearest future transition across all records (single linear scan)."""
    nearest: Optional[int] = None
    for record in records:
        candidate = next_transition(record, now)
        if candidate is None:
            continue
        if nearest is None or candidate < nearest:
            nearest = candidate
    return nearest


def seconds_until_next_transition(records: Iterable[TemporalRecord], now: int) -> Optional[int]:
    nearest = next_transition_for(records, now)
    if nearest is None:
        return None
    return nearest - now


def cap_cache_lifetime(records: Iterable[TemporalRecord], now: int, lifetime: int) -> int:
    """
    Shorten a cache lifetime so the entry cannot outlive the next visibility
    change. Without any future transition the lifetime is returned unchanged.
    The result never exceeds ``lifetime``.
    """
    remaining = seconds_until_next_transition(records, now)
    if remaining is None:
        return lifetime
    return min(lifetime, max(1, remaining))


def transitions_between(records: Iterable[TemporalRecord], start: int, end: int) -> List[TransitionEvent]:
    """All bounds in the half-open window (start, end], ordered by instant then uid."""
    events: List[TransitionEvent] = []
    for record in records:
        for bound, kind in record_bounds(record):
            if not (start < bound <= end):
                continue
            events.append(
                TransitionEvent(
                    instant=bound,
                    uid=record.uid,
                    table_name=record.table_name,
                    kind=kind,
                )
            )
    events.sort(key=lambda e: (e.instant, e.uid))
    return events
