from __future__ import annotations

import logging
from functools import lru_cache

from temporal_cache.core.config.settings import ExtensionSettings, load_settings


@lru_cache(maxsize=1)
def get_settings() -> ExtensionSettings:
    settings = load_settings()
    if settings.advanced.debug_logging:
        logging.getLogger("temporal_cache").setLevel(logging.DEBUG)
    return settings
