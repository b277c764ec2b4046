from .models import SourceKind, TemporalRecord, TransitionEvent, TransitionKind
from .transitions import (
    content_category,
    has_temporal_bounds,
    is_content,
    is_page,
    is_visible,
    next_transition,
    record_bounds,
    transition_kind,
)
from .aggregator import (
    cap_cache_lifetime,
    next_transition_for,
    seconds_until_next_transition,
    transitions_between,
)

__all__ = [
    "SourceKind",
    "TemporalRecord",
    "TransitionEvent",
    "TransitionKind",
    "content_category",
    "has_temporal_bounds",
    "is_content",
    "is_page",
    "is_visible",
    "next_transition",
    "record_bounds",
    "transition_kind",
    "cap_cache_lifetime",
    "next_transition_for",
    "seconds_until_next_transition",
    "transitions_between",
]
