"""Performance baselines the report compares measured frame statistics against."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class PerformanceBaselines:
    """
    Thresholds for a single report run.

    Percentile, average and worst thresholds apply to both the UI (build) and
    the raster thread. Missed-budget metrics pass when either the absolute
    count or the percentage-of-frames threshold is met.
    """

    p90_build_ms: float = 6.0
    p95_build_ms: float = 8.0
    p99_build_ms: float = 12.0
    missed_build_budget_count_max: int = 2
    missed_build_budget_percent_max: float = 2.5
    missed_raster_budget_count_max: int = 2
    missed_raster_budget_percent_max: float = 2.5
    average_build_ms: float = 6.0
    worst_build_ms: float = 30.0
    memory_usage_mb_max: float = 200.0
    cpu_usage_increase_max: int = 500000

    def __post_init__(self):
        for item in fields(self):
            value = getattr(self, item.name)
            if value < 0:
                raise ValueError(f"Baseline {item.name} must be non-negative, got {value}")

    @classmethod
    def from_dict(cls, overrides: dict[str, Any]) -> "PerformanceBaselines":
        """Build baselines from defaults plus the given overrides."""
        known = {item.name for item in fields(cls)}
        for key in overrides:
            if key not in known:
                raise ValueError(f"Unknown baseline: {key}")
        return cls(**overrides)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_baselines(path: str | Path | None) -> PerformanceBaselines:
    """
    Load baseline overrides from a JSON object on disk.

    Args:
        path: Path to a JSON file, or None for the defaults

    Returns:
        PerformanceBaselines with the overrides applied
    """
    if path is None:
        return PerformanceBaselines()

    with open(path, "r", encoding="utf-8") as f:
        overrides = json.load(f)

    if not isinstance(overrides, dict):
        raise ValueError(f"Baselines file must contain a JSON object: {path}")

    return PerformanceBaselines.from_dict(overrides)
