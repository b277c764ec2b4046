from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from temporal_cache.core.temporal.models import CONTENT_TABLE, PAGES_TABLE


MANDATORY_FIELDS: tuple[str, ...] = ("uid", "starttime", "endtime")

ERR_EMPTY_NAME = 1730289600
ERR_DEFAULT_TABLE = 1730289601
ERR_MISSING_FIELD = 1730289602
ERR_DUPLICATE = 1730289603
ERR_UNKNOWN_TABLE = 1730289604


class RegistrationError(ValueError):
    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code


def default_tables() -> Dict[str, List[str]]:
    return {
        PAGES_TABLE: ["uid", "title", "pid", "starttime", "endtime", "sys_language_uid", "hidden", "deleted"],
        CONTENT_TABLE: ["uid", "header", "pid", "starttime", "endtime", "sys_language_uid", "hidden", "deleted"],
    }


def _validated(name: str, fields: Optional[Sequence[str]], taken: Iterable[str]) -> List[str]:
    if not name or not name.strip():
        raise RegistrationError("Table name must not be empty", ERR_EMPTY_NAME)
    if name in default_tables():
        raise RegistrationError(f"Table {name!r} is a default table and cannot be registered", ERR_DEFAULT_TABLE)
    if name in taken:
        raise RegistrationError(f"Table {name!r} is already registered", ERR_DUPLICATE)

    resolved = list(fields) if fields is not None else list(MANDATORY_FIELDS)
    missing = [f for f in MANDATORY_FIELDS if f not in resolved]
    if missing:
        raise RegistrationError(
            f"Table {name!r} is missing mandatory fields: {', '.join(missing)}",
            ERR_MISSING_FIELD,
        )
    return resolved


class TemporalMonitorRegistry:
    """Which tables carry temporal fields, and which fields they expose.

    Resolution order:
      1) Default tables (always present, cannot be removed)
      2) Custom tables passed at construction

    Instances never change after construction; ``with_table`` and friends
    return a new registry.
    """

    def __init__(self, custom_tables: Optional[Mapping[str, Optional[Sequence[str]]]] = None):
        custom: Dict[str, List[str]] = {}
        for name, fields in (custom_tables or {}).items():
            custom[name] = _validated(name, fields, custom.keys())

        self._defaults = MappingProxyType({k: tuple(v) for k, v in default_tables().items()})
        self._custom = MappingProxyType({k: tuple(v) for k, v in custom.items()})

    def with_table(self, name: str, fields: Optional[Sequence[str]] = None) -> "TemporalMonitorRegistry":
        merged: Dict[str, Optional[Sequence[str]]] = {k: list(v) for k, v in self._custom.items()}
        _validated(name, fields, merged.keys())
        merged[name] = fields
        return TemporalMonitorRegistry(merged)

    def without_table(self, name: str) -> "TemporalMonitorRegistry":
        if name not in self._custom:
            return self
        return TemporalMonitorRegistry({k: list(v) for k, v in self._custom.items() if k != name})

    def without_custom_tables(self) -> "TemporalMonitorRegistry":
        return TemporalMonitorRegistry()

    def is_registered(self, name: str) -> bool:
        return name in self._defaults or name in self._custom

    def get_table_fields(self, name: str) -> Optional[List[str]]:
        fields = self._defaults.get(name) or self._custom.get(name)
        return list(fields) if fields is not None else None

    def all_tables(self) -> Dict[str, List[str]]:
        out = {k: list(v) for k, v in self._defaults.items()}
        out.update({k: list(v) for k, v in self._custom.items()})
        return out

    def custom_tables(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._custom.items()}

    @property
    def total_table_count(self) -> int:
        return len(self._defaults) + len(self._custom)

    @property
    def custom_table_count(self) -> int:
        return len(self._custom)
