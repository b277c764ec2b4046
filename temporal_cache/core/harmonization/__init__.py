from .config import HarmonizationConfig, parse_slot, format_slot
from .errors import ConfigurationDisabled, HarmonizationError, InvalidConfiguration
from .harmonizer import (
    HarmonizationSuggestion,
    distance_to_slot,
    harmonize,
    is_within_tolerance,
    suggest_for_record,
)
from .impact import HarmonizationImpact, analyze_impact

__all__ = [
    "HarmonizationConfig",
    "parse_slot",
    "format_slot",
    "ConfigurationDisabled",
    "HarmonizationError",
    "InvalidConfiguration",
    "HarmonizationSuggestion",
    "distance_to_slot",
    "harmonize",
    "is_within_tolerance",
    "suggest_for_record",
    "HarmonizationImpact",
    "analyze_impact",
]
