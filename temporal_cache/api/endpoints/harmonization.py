from __future__ import annotations

from fastapi import APIRouter, Depends

from temporal_cache.api.deps import get_settings
from temporal_cache.api.schemas import HarmonizeRequest, ImpactRequest, RecordsRequest
from temporal_cache.core.config.settings import ExtensionSettings
from temporal_cache.core.harmonization.harmonizer import harmonize, suggest_for_record
from temporal_cache.core.harmonization.impact import analyze_impact
from temporal_cache.core.observability.metrics import record_operation


router = APIRouter(prefix="/api/v1/harmonization", tags=["harmonization"])


@router.post("/harmonize")
def harmonize_timestamp(req: HarmonizeRequest, settings: ExtensionSettings = Depends(get_settings)):
    config = settings.harmonization_config()
    result = harmonize(req.timestamp, config)
    record_operation("harmonize")
    return {
        "timestamp": req.timestamp,
        "harmonized": result,
        "shift_seconds": result - req.timestamp,
        "within_tolerance": abs(result - req.timestamp) <= config.tolerance_seconds,
    }


@router.post("/impact")
def harmonization_impact(req: ImpactRequest, settings: ExtensionSettings = Depends(get_settings)):
    impact = analyze_impact(req.timestamps, settings.harmonization_config())
    record_operation("impact")
    return impact.to_dict()


@router.post("/preview")
def harmonization_preview(req: RecordsRequest, settings: ExtensionSettings = Depends(get_settings)):
    """Per-record harmonization suggestions; nothing is written anywhere."""
    config = settings.harmonization_config()
    # Fail on a disabled configuration even when the batch is empty.
    config.require_usable()

    if not req.records:
        record_operation("preview", "no_content")
        return {"success": False, "message": "no_content", "results": []}

    suggestions = [suggest_for_record(r, config) for r in req.to_records()]
    changed = sum(1 for s in suggestions if s.changed)
    record_operation("preview")
    return {
        "success": True,
        "message": f"{changed} of {len(suggestions)} records would change",
        "results": [s.to_dict() for s in suggestions],
    }
