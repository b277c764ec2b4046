from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Named counters (core operations, health probes)
_NAMED = Counter()

_PROM_OPERATIONS = PromCounter(
    "temporal_cache_operations_total",
    "Core operations served",
    ["operation", "outcome"],
)


def reset_metrics() -> None:
    """
    Test helper: clears all counters to avoid cross-test leakage.
    Safe to call multiple times.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def record_operation(operation: str, outcome: str = "ok") -> None:
    """Count one core operation call, e.g. ("harmonize", "disabled")."""
    inc_named(f"{operation}_{outcome}")
    _PROM_OPERATIONS.labels(operation=operation, outcome=outcome).inc()


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
