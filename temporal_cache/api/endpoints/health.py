from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from temporal_cache.api.deps import get_settings
from temporal_cache.core.config.settings import ExtensionSettings
from temporal_cache.core.observability.metrics import inc_named, snapshot_named

router = APIRouter()


@router.get("/health/live")
def live():
    inc_named("health_live")
    return {"status": "ok"}


@router.get("/health/ready")
def ready(settings: ExtensionSettings = Depends(get_settings)):
    # Resolving settings is the only precondition; SettingsError maps to 503.
    inc_named("health_ready")
    return {"status": "ready", "harmonization_enabled": settings.harmonization.enabled}


@router.get("/metrics/snapshot")
def metrics_snapshot():
    return snapshot_named()


@router.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/api/v1/config")
def resolved_config(settings: ExtensionSettings = Depends(get_settings)):
    body = settings.model_dump(mode="json")
    body["harmonization_config"] = settings.harmonization_config().to_dict()
    return body
