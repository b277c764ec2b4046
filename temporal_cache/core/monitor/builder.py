from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from temporal_cache.core.temporal.models import TemporalRecord

from .registry import ERR_UNKNOWN_TABLE, RegistrationError, TemporalMonitorRegistry

_log = logging.getLogger("temporal_cache.monitor")

_LABEL_FIELDS = ("title", "header")


def _optional_instant(value: Any) -> Optional[int]:
    # Storage rows use 0 for "no bound".
    if value in (None, "", 0, "0"):
        return None
    return int(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


class TemporalRecordBuilder:
    """Builds TemporalRecord values from raw storage rows of registered tables."""

    def __init__(self, registry: TemporalMonitorRegistry):
        self.registry = registry

    def from_row(self, table_name: str, row: Mapping[str, Any]) -> TemporalRecord:
        if not self.registry.is_registered(table_name):
            raise RegistrationError(f"Table {table_name!r} is not registered", ERR_UNKNOWN_TABLE)

        label = ""
        for key in _LABEL_FIELDS:
            if row.get(key):
                label = str(row[key])
                break

        return TemporalRecord(
            uid=int(row["uid"]),
            table_name=table_name,
            label=label,
            container_id=int(row.get("pid") or 0),
            visible_from=_optional_instant(row.get("starttime")),
            visible_until=_optional_instant(row.get("endtime")),
            locale_id=int(row.get("sys_language_uid") or 0),
            variant_id=int(row.get("t3ver_wsid") or row.get("workspace_uid") or 0),
            hidden=_flag(row.get("hidden", False)),
            deleted=_flag(row.get("deleted", False)),
        )

    def from_rows(self, table_name: str, rows: Iterable[Mapping[str, Any]]) -> List[TemporalRecord]:
        if not self.registry.is_registered(table_name):
            raise RegistrationError(f"Table {table_name!r} is not registered", ERR_UNKNOWN_TABLE)

        records: List[TemporalRecord] = []
        for row in rows:
            try:
                records.append(self.from_row(table_name, row))
            except (KeyError, TypeError, ValueError) as exc:
                _log.warning("Skipping malformed %s row %r: %s", table_name, row.get("uid"), exc)
        return records
