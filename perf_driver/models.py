"""Frame statistics and device telemetry records consumed by the report."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Any, Mapping


FRAME_RATE_LABELS = ("30Hz", "60Hz", "80Hz", "90Hz", "120Hz")
BYTES_PER_MB = 1024 * 1024
UNKNOWN_OS = "Unknown OS"

# FrameStatistics attribute -> key in the driver's "performance" mapping
PERFORMANCE_KEYS = {
    "p90_build_ms": "90th_percentile_frame_build_time_millis",
    "p95_build_ms": "95th_percentile_frame_build_time_millis",
    "p99_build_ms": "99th_percentile_frame_build_time_millis",
    "missed_build_budget_count": "missed_frame_build_budget_count",
    "average_build_ms": "average_frame_build_time_millis",
    "worst_build_ms": "worst_frame_build_time_millis",
    "total_frames": "total_frames",
    "p90_raster_ms": "90th_percentile_frame_raster_time_millis",
    "p95_raster_ms": "95th_percentile_frame_raster_time_millis",
    "p99_raster_ms": "99th_percentile_frame_raster_time_millis",
    "missed_raster_budget_count": "missed_frame_rasterizer_budget_count",
    "average_raster_ms": "average_frame_raster_time_millis",
    "worst_raster_ms": "worst_frame_raster_time_millis",
    "total_rasterizer_frames": "total_rasterizer_frames",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def bytes_to_mb(byte_count: int | None) -> float:
    """Megabytes to two decimals, halves rounded up; None counts as zero."""
    exact = Decimal((byte_count or 0) / BYTES_PER_MB)
    return float(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class FrameStatistics:
    """Reduced frame timings for one completed trace."""

    p90_build_ms: float
    p95_build_ms: float
    p99_build_ms: float
    average_build_ms: float
    worst_build_ms: float
    missed_build_budget_count: int
    total_frames: int
    p90_raster_ms: float
    p95_raster_ms: float
    p99_raster_ms: float
    average_raster_ms: float
    worst_raster_ms: float
    missed_raster_budget_count: int
    total_rasterizer_frames: int
    frame_rates: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "frame_rates", MappingProxyType(dict(self.frame_rates)))

    @classmethod
    def from_performance(
        cls,
        performance: dict[str, Any],
        frame_rate_info: dict[str, Any] | None = None
    ) -> "FrameStatistics":
        """
        Build statistics from the driver's "performance" and "frame_rate_info" mappings.

        Raises:
            KeyError: if a performance key is missing
        """
        values = {attr: performance[key] for attr, key in PERFORMANCE_KEYS.items()}
        frame_rates = {
            label: (frame_rate_info or {}).get(label)
            for label in FRAME_RATE_LABELS
            if (frame_rate_info or {}).get(label) is not None
        }
        return cls(**values, frame_rates=frame_rates)

    def to_performance(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in PERFORMANCE_KEYS.items()}

    def frame_rate_info(self) -> dict[str, float]:
        return {label: self.frame_rates.get(label, 0) for label in FRAME_RATE_LABELS}


@dataclass(frozen=True)
class TelemetryReading:
    """Heap usage (bytes) and cumulative CPU sample count at one instant."""

    heap_usage: int | None = None
    cpu_samples: int | None = None

    @property
    def heap_usage_mb(self) -> float:
        return bytes_to_mb(self.heap_usage)


@dataclass(frozen=True)
class DeviceSnapshot:
    """Telemetry taken before and after the traced interaction."""

    before: TelemetryReading
    after: TelemetryReading
    operating_system: str = UNKNOWN_OS

    @property
    def cpu_sample_delta(self) -> int:
        return (self.after.cpu_samples or 0) - (self.before.cpu_samples or 0)

    @classmethod
    def from_report_data(cls, data: dict[str, Any]) -> "DeviceSnapshot | None":
        """
        Extract device telemetry from testing data, or None when the run has none.
        """
        if not any(key in data for key in ("device_details", "cpu_usage", "memory_usage")):
            return None

        cpu_usage = data.get("cpu_usage") or {}
        memory_usage = data.get("memory_usage") or {}
        device_details = data.get("device_details") or {}

        def reading(phase: str) -> TelemetryReading:
            cpu = cpu_usage.get(phase) or {}
            memory = (memory_usage.get(phase) or {}).get("memory_usage") or {}
            return TelemetryReading(
                heap_usage=memory.get("heapUsage"),
                cpu_samples=cpu.get("total_cpu_samples")
            )

        return cls(
            before=reading("initial"),
            after=reading("final"),
            operating_system=device_details.get("operating_system") or UNKNOWN_OS
        )

    def to_report_data(self) -> dict[str, Any]:
        def cpu(reading: TelemetryReading) -> dict:
            if reading.cpu_samples is None:
                return {}
            return {"total_cpu_samples": reading.cpu_samples}

        def memory(reading: TelemetryReading) -> dict:
            if reading.heap_usage is None:
                return {}
            return {"memory_usage": {"heapUsage": reading.heap_usage}}

        return {
            "device_details": {"operating_system": self.operating_system},
            "cpu_usage": {"initial": cpu(self.before), "final": cpu(self.after)},
            "memory_usage": {"initial": memory(self.before), "final": memory(self.after)}
        }
