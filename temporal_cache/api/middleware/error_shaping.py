from __future__ import annotations

import logging
import traceback
from typing import Callable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from temporal_cache.core.config.settings import SettingsError
from temporal_cache.core.harmonization.errors import ConfigurationDisabled, InvalidConfiguration
from temporal_cache.core.monitor.registry import RegistrationError

log = logging.getLogger("temporal_cache.errors")


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    - Never return stack traces to clients
    - Preserve request_id if present
    - Log traceback server-side
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            payload = {"detail": "Internal Server Error"}
            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=500, content=payload)


def _error_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    payload = {"detail": detail}
    rid = getattr(request.state, "request_id", None)
    if rid:
        payload["request_id"] = rid
    return JSONResponse(status_code=status_code, content=payload)


def register_error_handlers(app: FastAPI) -> None:
    """Map core errors to client-facing statuses; nothing else leaks."""

    @app.exception_handler(ConfigurationDisabled)
    async def _disabled(request: Request, exc: ConfigurationDisabled):
        log.info("Harmonization requested while disabled path=%s", request.url.path)
        return _error_response(request, 409, str(exc))

    @app.exception_handler(InvalidConfiguration)
    async def _invalid_config(request: Request, exc: InvalidConfiguration):
        log.warning("Invalid harmonization configuration: %s", exc)
        return _error_response(request, 422, f"invalid harmonization configuration: {exc}")

    @app.exception_handler(RegistrationError)
    async def _registration(request: Request, exc: RegistrationError):
        return _error_response(request, 422, f"{exc} (code {exc.code})")

    @app.exception_handler(SettingsError)
    async def _settings(request: Request, exc: SettingsError):
        log.error("Settings could not be resolved: %s", exc)
        return _error_response(request, 503, "settings_invalid")
