"""
Extension settings loader.

Reads an optional YAML/JSON settings file and resolves it into typed,
immutable settings. Missing keys fall back to documented defaults.

Settings file format (YAML or JSON):
    scoping:
      strategy: per-content        # global | per-page | per-content
      use_refindex: true
    timing:
      strategy: hybrid             # dynamic | scheduler | hybrid
      scheduler_interval: 120      # seconds, minimum 60
      hybrid:
        pages: dynamic
        content: scheduler
    harmonization:
      enabled: true
      slots: "00:00,06:00,12:00,18:00"
      tolerance: 3600
      auto_round: false
    advanced:
      default_max_lifetime: 86400
      debug_logging: false

Environment variable:
    TEMPORAL_CACHE_CONFIG_FILE: path to the settings file (optional).
    Default search path: <project_root>/temporal_cache.yaml
"""
from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from temporal_cache.core.harmonization.config import (
    DEFAULT_SLOTS,
    DEFAULT_TOLERANCE_SECONDS,
    HarmonizationConfig,
    parse_slot,
)

_log = logging.getLogger("temporal_cache.settings")

MIN_SCHEDULER_INTERVAL = 60


class SettingsError(ValueError):
    pass


class ScopingStrategy(str, Enum):
    GLOBAL = "global"
    PER_PAGE = "per-page"
    PER_CONTENT = "per-content"


class TimingStrategy(str, Enum):
    DYNAMIC = "dynamic"
    SCHEDULER = "scheduler"
    HYBRID = "hybrid"


class ScopingSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: ScopingStrategy = ScopingStrategy.GLOBAL
    use_refindex: bool = True


class HybridRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: TimingStrategy = TimingStrategy.DYNAMIC
    content: TimingStrategy = TimingStrategy.SCHEDULER

    @field_validator("pages", "content")
    @classmethod
    def _not_hybrid(cls, v: TimingStrategy) -> TimingStrategy:
        if v == TimingStrategy.HYBRID:
            raise ValueError("hybrid rules must name dynamic or scheduler")
        return v


class TimingSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: TimingStrategy = TimingStrategy.DYNAMIC
    scheduler_interval: int = MIN_SCHEDULER_INTERVAL
    hybrid: HybridRules = Field(default_factory=HybridRules)

    @field_validator("scheduler_interval")
    @classmethod
    def _enforce_minimum(cls, v: int) -> int:
        return max(MIN_SCHEDULER_INTERVAL, int(v))


class HarmonizationSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    slots: List[str] = Field(default_factory=lambda: list(DEFAULT_SLOTS))
    tolerance: int = DEFAULT_TOLERANCE_SECONDS
    auto_round: bool = False

    @field_validator("slots", mode="before")
    @classmethod
    def _split_slots(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            slots = [str(s).strip() for s in v if str(s).strip()]
            for s in slots:
                parse_slot(s)
            return slots
        return v


class AdvancedSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_max_lifetime: int = 86400
    debug_logging: bool = False


class ExtensionSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    scoping: ScopingSettings = Field(default_factory=ScopingSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)
    harmonization: HarmonizationSettings = Field(default_factory=HarmonizationSettings)
    advanced: AdvancedSettings = Field(default_factory=AdvancedSettings)

    # Loaded mapping, kept verbatim for reporting.
    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    def is_per_content_scoping(self) -> bool:
        return self.scoping.strategy == ScopingStrategy.PER_CONTENT

    def is_scheduler_timing(self) -> bool:
        return self.timing.strategy == TimingStrategy.SCHEDULER

    def is_hybrid_timing(self) -> bool:
        return self.timing.strategy == TimingStrategy.HYBRID

    def is_dynamic_timing(self) -> bool:
        return self.timing.strategy == TimingStrategy.DYNAMIC

    def harmonization_config(self) -> HarmonizationConfig:
        h = self.harmonization
        return HarmonizationConfig(
            enabled=h.enabled,
            slots=tuple(parse_slot(s) for s in h.slots),
            tolerance_seconds=h.tolerance,
        )


def settings_from_mapping(raw: Optional[Mapping[str, Any]]) -> ExtensionSettings:
    data = dict(raw or {})
    sections = {k: data[k] for k in ("scoping", "timing", "harmonization", "advanced") if isinstance(data.get(k), dict)}
    try:
        return ExtensionSettings(**sections, raw=data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid temporal cache settings: {exc}") from exc


def load_settings(path: Optional[Path] = None) -> ExtensionSettings:
    """
    Load settings from a YAML or JSON file.

    Falls back to defaults if the file is absent, not readable, or not a
    mapping. Unknown strategy names or malformed values raise SettingsError.
    """
    resolved = _resolve_path(path)
    if resolved is None or not resolved.exists():
        return settings_from_mapping({})

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read settings file %s: %s", resolved, exc)
        return settings_from_mapping({})

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse settings file %s as JSON or YAML: %s", resolved, exc)
            return settings_from_mapping({})

    if data is None:
        data = {}
    if not isinstance(data, dict):
        _log.warning("Settings file %s must be a mapping, got %s", resolved, type(data).__name__)
        return settings_from_mapping({})

    settings = settings_from_mapping(data)
    _log.info(
        "Loaded settings from %s (scoping=%s timing=%s harmonization=%s)",
        resolved,
        settings.scoping.strategy.value,
        settings.timing.strategy.value,
        settings.harmonization.enabled,
    )
    return settings


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    """Determine the settings file path from argument or env var or default."""
    if path is not None:
        return Path(path)
    env_path = os.getenv("TEMPORAL_CACHE_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)
    project_root = Path(__file__).resolve().parents[3]
    return project_root / "temporal_cache.yaml"
