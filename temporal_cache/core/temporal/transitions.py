from __future__ import annotations

from typing import List, Optional, Tuple

from .models import PAGES_TABLE, SourceKind, TemporalRecord, TransitionKind


def is_visible(record: TemporalRecord, now: int) -> bool:
    if record.hidden or record.deleted:
        return False
    if record.visible_from is not None and now < record.visible_from:
        return False
    if record.visible_until is not None and now >= record.visible_until:
        return False
    return True


def has_temporal_bounds(record: TemporalRecord) -> bool:
    return record.visible_from is not None or record.visible_until is not None


def next_transition(record: TemporalRecord, now: int) -> Optional[int]:
    """Smallest bound strictly after ``now``, or None."""
    best: Optional[int] = None
    for bound in (record.visible_from, record.visible_until):
        if bound is None or bound <= now:
            continue
        if best is None or bound < best:
            best = bound
    return best


def transition_kind(record: TemporalRecord, instant: int) -> TransitionKind:
    if record.visible_from is not None and instant == record.visible_from:
        return TransitionKind.START
    if record.visible_until is not None and instant == record.visible_until:
        return TransitionKind.END
    return TransitionKind.NONE


def record_bounds(record: TemporalRecord) -> List[Tuple[int, TransitionKind]]:
    """Present bounds paired with the kind of change each one triggers."""
    bounds = [(record.visible_from, TransitionKind.START), (record.visible_until, TransitionKind.END)]
    return [(b, kind) for b, kind in bounds if b is not None]


def content_category(record: TemporalRecord) -> SourceKind:
    if record.table_name == PAGES_TABLE:
        return SourceKind.PAGE
    return SourceKind.CONTENT


def is_page(record: TemporalRecord) -> bool:
    return content_category(record) == SourceKind.PAGE


def is_content(record: TemporalRecord) -> bool:
    return content_category(record) == SourceKind.CONTENT
