from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from temporal_cache.api.deps import get_settings
from temporal_cache.api.schemas import NextTransitionRequest, TransitionWindowRequest
from temporal_cache.core.config.settings import ExtensionSettings
from temporal_cache.core.observability.metrics import record_operation
from temporal_cache.core.temporal.aggregator import next_transition_for, transitions_between
from temporal_cache.core.temporal.strategies import effective_cache_lifetime


router = APIRouter(prefix="/api/v1/transitions", tags=["transitions"])


@router.post("/next")
def next_transition(req: NextTransitionRequest, settings: ExtensionSettings = Depends(get_settings)):
    records = req.to_records()
    nearest = next_transition_for(records, req.now)
    lifetime = req.lifetime if req.lifetime is not None else settings.advanced.default_max_lifetime
    record_operation("next_transition", "found" if nearest is not None else "none")

    return {
        "now": req.now,
        "next_transition": nearest,
        "seconds_until": (nearest - req.now) if nearest is not None else None,
        "cache_lifetime": effective_cache_lifetime(records, req.now, lifetime, settings),
        "timing_strategy": settings.timing.strategy.value,
    }


@router.post("/window")
def transition_window(req: TransitionWindowRequest):
    if req.end < req.start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    events = transitions_between(req.to_records(), req.start, req.end)
    record_operation("transition_window")
    return {
        "start": req.start,
        "end": req.end,
        "transitions": [e.to_dict() for e in events],
    }
