from __future__ import annotations


class HarmonizationError(Exception):
    """Base class for harmonization failures."""


class ConfigurationDisabled(HarmonizationError):
    def __init__(self, message: str = "harmonization is disabled"):
        super().__init__(message)


class InvalidConfiguration(HarmonizationError, ValueError):
    pass
