from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable

from .config import HarmonizationConfig
from .harmonizer import harmonize

_log = logging.getLogger("temporal_cache.harmonization")


def _reduction(original: int, reduced: int) -> float:
    if original == 0:
        return 0.0
    return (original - reduced) / original * 100.0


@dataclass(frozen=True)
class HarmonizationImpact:
    """
    How far harmonization consolidates a batch of instants.

    ``harmonized_count`` snaps every instant regardless of distance. The
    ``tolerance_gated_*`` figures only snap instants whose slot lies within
    the configured tolerance; the others keep their own instant. Which of the
    two a caller acts on is its policy decision.
    """

    original_count: int
    harmonized_count: int
    reduction_percent: float
    within_tolerance_count: int
    beyond_tolerance_count: int
    tolerance_gated_count: int
    tolerance_gated_reduction_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original_count,
            "harmonized": self.harmonized_count,
            "reduction": round(self.reduction_percent, 2),
            "within_tolerance": self.within_tolerance_count,
            "beyond_tolerance": self.beyond_tolerance_count,
            "tolerance_gated": self.tolerance_gated_count,
            "tolerance_gated_reduction": round(self.tolerance_gated_reduction_percent, 2),
        }


def analyze_impact(instants: Iterable[int], config: HarmonizationConfig) -> HarmonizationImpact:
    config.require_usable()

    distinct = {int(i) for i in instants}
    harmonized = set()
    gated = set()
    within = 0
    for instant in distinct:
        target = harmonize(instant, config)
        harmonized.add(target)
        if abs(target - instant) <= config.tolerance_seconds:
            within += 1
            gated.add(target)
        else:
            gated.add(instant)

    impact = HarmonizationImpact(
        original_count=len(distinct),
        harmonized_count=len(harmonized),
        reduction_percent=_reduction(len(distinct), len(harmonized)),
        within_tolerance_count=within,
        beyond_tolerance_count=len(distinct) - within,
        tolerance_gated_count=len(gated),
        tolerance_gated_reduction_percent=_reduction(len(distinct), len(gated)),
    )
    _log.info(
        "harmonization impact: %d distinct -> %d (%.1f%% reduction, %d beyond tolerance)",
        impact.original_count,
        impact.harmonized_count,
        impact.reduction_percent,
        impact.beyond_tolerance_count,
    )
    return impact
