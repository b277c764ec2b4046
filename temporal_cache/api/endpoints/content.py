from __future__ import annotations

from fastapi import APIRouter, Depends

from temporal_cache.api.deps import get_settings
from temporal_cache.api.schemas import FilterRequest, StatisticsRequest
from temporal_cache.core.config.settings import ExtensionSettings
from temporal_cache.core.content.filters import ContentFilter, filter_records
from temporal_cache.core.content.statistics import content_statistics
from temporal_cache.core.observability.metrics import record_operation
from temporal_cache.core.temporal.strategies import invalidation_tags


router = APIRouter(prefix="/api/v1/content", tags=["content"])


@router.post("/filter")
def filter_content(req: FilterRequest, settings: ExtensionSettings = Depends(get_settings)):
    content_filter = ContentFilter.parse(req.filter)
    matched = filter_records(req.to_records(), content_filter, req.now, settings.harmonization_config())
    record_operation("filter")
    return {
        "filter": content_filter.value,
        "count": len(matched),
        "uids": [r.uid for r in matched],
        "items": [
            {**r.to_dict(), "cache_tags": invalidation_tags(r, settings.scoping.strategy)}
            for r in matched
        ],
    }


@router.post("/statistics")
def statistics(req: StatisticsRequest, settings: ExtensionSettings = Depends(get_settings)):
    stats = content_statistics(req.to_records(), req.now, settings.harmonization_config(), horizon=req.horizon)
    record_operation("statistics")
    return stats.to_dict()
