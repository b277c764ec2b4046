from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from temporal_cache.api.endpoints import content, harmonization, health, transitions
from temporal_cache.api.middleware.error_shaping import SafeErrorMiddleware, register_error_handlers
from temporal_cache.api.middleware.request_context import RequestContextMiddleware


app = FastAPI(
    title="Temporal Cache API",
    version="0.1.0",
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
# Runtime order (outermost -> innermost):
#   SafeErrorMiddleware -> CORSMiddleware -> RequestContext -> handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)

_cors_origins_raw = os.getenv("TEMPORAL_CACHE_CORS_ORIGINS", "").strip()
_cors_origins = [o.strip() for o in _cors_origins_raw.split(",") if o.strip()] if _cors_origins_raw else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.add_middleware(SafeErrorMiddleware)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(transitions.router)
app.include_router(harmonization.router)
app.include_router(content.router)
