from __future__ import annotations

from typing import Iterable, List

from temporal_cache.core.config.settings import ExtensionSettings, ScopingStrategy, TimingStrategy
from temporal_cache.core.harmonization.harmonizer import harmonize

from .aggregator import cap_cache_lifetime, transitions_between
from .models import SourceKind, TemporalRecord, TransitionEvent
from .transitions import content_category, record_bounds


def _page_id(record: TemporalRecord) -> int:
    if content_category(record) == SourceKind.PAGE:
        return record.uid
    return record.container_id


def invalidation_tags(record: TemporalRecord, scoping: ScopingStrategy) -> List[str]:
    """Cache tags to flush when ``record`` changes visibility."""
    if scoping == ScopingStrategy.GLOBAL:
        return ["pages"]
    if scoping == ScopingStrategy.PER_PAGE:
        return [f"pageId_{_page_id(record)}"]
    if scoping == ScopingStrategy.PER_CONTENT:
        tags = [f"pageId_{_page_id(record)}"]
        if content_category(record) == SourceKind.CONTENT:
            tags.append(f"{record.table_name}_{record.uid}")
        return tags
    raise ValueError(f"Unhandled scoping strategy: {scoping!r}")


def timing_for(record: TemporalRecord, settings: ExtensionSettings) -> TimingStrategy:
    """Effective timing for one record; hybrid is resolved per category."""
    strategy = settings.timing.strategy
    if strategy in (TimingStrategy.DYNAMIC, TimingStrategy.SCHEDULER):
        return strategy
    if strategy == TimingStrategy.HYBRID:
        rules = settings.timing.hybrid
        if content_category(record) == SourceKind.PAGE:
            return rules.pages
        return rules.content
    raise ValueError(f"Unhandled timing strategy: {strategy!r}")


def effective_cache_lifetime(
    records: Iterable[TemporalRecord],
    now: int,
    lifetime: int,
    settings: ExtensionSettings,
) -> int:
    """
    Cache lifetime for a rendered page.

    Only records handled by dynamic timing shorten the lifetime; scheduler
    records are flushed by the periodic task instead. The result never
    exceeds ``advanced.default_max_lifetime``.
    """
    dynamic = [r for r in records if timing_for(r, settings) == TimingStrategy.DYNAMIC]
    capped = min(lifetime, settings.advanced.default_max_lifetime)
    return cap_cache_lifetime(dynamic, now, capped)


def due_transitions(
    records: Iterable[TemporalRecord],
    last_run: int,
    now: int,
    settings: ExtensionSettings,
) -> List[TransitionEvent]:
    """
    Transitions the scheduler must act on in the window (last_run, now].

    With ``auto_round`` and harmonization both enabled, bounds are harmonized
    before the window test, so the task fires on slot instants.
    """
    scheduled = [r for r in records if timing_for(r, settings) == TimingStrategy.SCHEDULER]
    h = settings.harmonization
    if not (h.enabled and h.auto_round):
        return transitions_between(scheduled, last_run, now)

    config = settings.harmonization_config()
    events: List[TransitionEvent] = []
    for record in scheduled:
        for bound, kind in record_bounds(record):
            slot = harmonize(bound, config)
            if last_run < slot <= now:
                events.append(
                    TransitionEvent(
                        instant=slot,
                        uid=record.uid,
                        table_name=record.table_name,
                        kind=kind,
                    )
                )
    events.sort(key=lambda e: (e.instant, e.uid))
    return events
