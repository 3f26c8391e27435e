"""Pass/fail judgments and improvement suggestions for frame statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from perf_driver.baselines import PerformanceBaselines
from perf_driver.models import DeviceSnapshot, FrameStatistics, round_half_up


NO_ISSUES_SUGGESTION = "Your app is performing well with no significant issues detected."

# Suggestions are listed in this order regardless of table layout
SUGGESTION_ORDER = [
    "p90_build",
    "p95_build",
    "p99_build",
    "p90_raster",
    "p95_raster",
    "p99_raster",
    "missed_build_budget",
    "missed_raster_budget",
    "average_build",
    "worst_build",
    "average_raster",
    "worst_raster",
    "cpu_usage_increase",
]


@dataclass(frozen=True)
class MetricCheck:
    """One measured metric judged against its baseline."""

    key: str
    label: str
    baseline: str
    actual: Any
    passed: bool
    suggestion: str | None = None


def percent_budget_count(percent: float, total_frames: int) -> int:
    """Frame count equivalent of a percentage-of-total budget."""
    return round_half_up(percent * total_frames / 100)


def within_missed_budget(missed: int, count_max: int, percent_max: float, total_frames: int) -> bool:
    return missed <= count_max or missed <= percent_budget_count(percent_max, total_frames)


def _threshold_check(key: str, label: str, actual: float, threshold: float, suggestion: str) -> MetricCheck:
    return MetricCheck(
        key=key,
        label=label,
        baseline=f"<= {threshold}",
        actual=actual,
        passed=actual <= threshold,
        suggestion=suggestion
    )


def _missed_budget_check(
    key: str,
    missed: int,
    count_max: int,
    percent_max: float,
    total_frames: int,
    suggestion: str
) -> MetricCheck:
    equivalent = percent_budget_count(percent_max, total_frames)
    return MetricCheck(
        key=key,
        label="Skipped Frames (Count)",
        baseline=f"<= {count_max} frames OR <= {percent_max}% of {total_frames} = {equivalent}",
        actual=missed,
        passed=within_missed_budget(missed, count_max, percent_max, total_frames),
        suggestion=suggestion
    )


def ui_thread_checks(stats: FrameStatistics, baselines: PerformanceBaselines) -> list[MetricCheck]:
    """Checks for the UI thread table, in table order."""
    return [
        _threshold_check(
            "p90_build",
            "90th Percentile Frame Build Time (ms)",
            stats.p90_build_ms,
            baselines.p90_build_ms,
            f"- **UI Build Time:** The 90th percentile frame build time is higher than expected "
            f"({stats.p90_build_ms} ms). Enable the performance overlay and identify heavy "
            f"operations or widget rebuilds that may be slowing down your UI."
        ),
        _threshold_check(
            "p95_build",
            "95th Percentile Frame Build Time (ms)",
            stats.p95_build_ms,
            baselines.p95_build_ms,
            f"- **UI Build Time:** The 95th percentile frame build time is high "
            f"({stats.p95_build_ms} ms). Consider refactoring or optimizing your widgets to "
            f"reduce the load on the UI thread."
        ),
        _threshold_check(
            "p99_build",
            "99th Percentile Frame Build Time (ms)",
            stats.p99_build_ms,
            baselines.p99_build_ms,
            f"- **UI Build Time:** The 99th percentile frame build time is excessively high "
            f"({stats.p99_build_ms} ms). Investigate for any expensive operations that may "
            f"need to be offloaded to a background isolate."
        ),
        _missed_budget_check(
            "missed_build_budget",
            stats.missed_build_budget_count,
            baselines.missed_build_budget_count_max,
            baselines.missed_build_budget_percent_max,
            stats.total_frames,
            f"- **Skipped UI Frames:** Your app skipped {stats.missed_build_budget_count} UI "
            f"frames. Investigate the performance overlay and ensure that your UI operations "
            f"are efficient."
        ),
        _threshold_check(
            "average_build",
            "Average Frame Build Time (ms)",
            stats.average_build_ms,
            baselines.average_build_ms,
            f"- **Average UI Build Time:** The average frame build time is higher than expected "
            f"({stats.average_build_ms} ms). Consider optimizing your widget tree and avoiding "
            f"unnecessary rebuilds."
        ),
        _threshold_check(
            "worst_build",
            "Slowest Frame Build Time (ms)",
            stats.worst_build_ms,
            baselines.worst_build_ms,
            f"- **Slowest UI Frame Build Time:** The slowest frame build time was particularly "
            f"high ({stats.worst_build_ms} ms). Investigate the cause using the performance "
            f"overlay and try to identify heavy operations."
        ),
    ]


def raster_thread_checks(stats: FrameStatistics, baselines: PerformanceBaselines) -> list[MetricCheck]:
    """Checks for the raster thread table, in table order."""
    return [
        _threshold_check(
            "p90_raster",
            "90th Percentile Frame Raster Time (ms)",
            stats.p90_raster_ms,
            baselines.p90_build_ms,
            f"- **Raster Time:** The 90th percentile frame raster time is higher than expected "
            f"({stats.p90_raster_ms} ms). Consider simplifying your visuals or reducing the "
            f"number of layers."
        ),
        _threshold_check(
            "p95_raster",
            "95th Percentile Frame Raster Time (ms)",
            stats.p95_raster_ms,
            baselines.p95_build_ms,
            f"- **Raster Time:** The 95th percentile frame raster time is high "
            f"({stats.p95_raster_ms} ms). Optimize your rendering logic or avoid using complex "
            f"drawing operations."
        ),
        _threshold_check(
            "p99_raster",
            "99th Percentile Frame Raster Time (ms)",
            stats.p99_raster_ms,
            baselines.p99_build_ms,
            f"- **Raster Time:** The 99th percentile frame raster time is excessively high "
            f"({stats.p99_raster_ms} ms). Check for expensive graphics operations or consider "
            f"reducing visual complexity."
        ),
        _missed_budget_check(
            "missed_raster_budget",
            stats.missed_raster_budget_count,
            baselines.missed_raster_budget_count_max,
            baselines.missed_raster_budget_percent_max,
            stats.total_rasterizer_frames,
            f"- **Skipped Raster Frames:** Your app skipped {stats.missed_raster_budget_count} "
            f"raster frames. This indicates heavy graphics operations that may need to be "
            f"optimized."
        ),
        _threshold_check(
            "average_raster",
            "Average Frame Raster Time (ms)",
            stats.average_raster_ms,
            baselines.average_build_ms,
            f"- **Average Raster Time:** The average frame raster time is higher than expected "
            f"({stats.average_raster_ms} ms). Consider simplifying your visual design or "
            f"reducing the number of layers."
        ),
        _threshold_check(
            "worst_raster",
            "Slowest Frame Raster Time (ms)",
            stats.worst_raster_ms,
            baselines.worst_build_ms,
            f"- **Slowest Raster Frame Time:** The slowest raster frame time was particularly "
            f"high ({stats.worst_raster_ms} ms). Optimize your graphics operations or consider "
            f"offloading heavy work to a background isolate."
        ),
    ]


def device_checks(device: DeviceSnapshot, baselines: PerformanceBaselines) -> list[MetricCheck]:
    """
    Checks for the device performance table.

    Memory rows are judged on the two-decimal megabyte value shown in the
    table; only the CPU row carries a suggestion.
    """
    checks = []
    for key, label, reading in [
        ("initial_memory", "Initial Memory Usage (MB)", device.before),
        ("final_memory", "Final Memory Usage (MB)", device.after),
    ]:
        memory_mb = reading.heap_usage_mb
        checks.append(
            MetricCheck(
                key=key,
                label=label,
                baseline=f"<= {baselines.memory_usage_mb_max}",
                actual=f"{memory_mb:.2f}",
                passed=memory_mb <= baselines.memory_usage_mb_max
            )
        )

    delta = device.cpu_sample_delta
    checks.append(
        MetricCheck(
            key="cpu_usage_increase",
            label="CPU Usage Increase (Samples)",
            baseline=f"<= {baselines.cpu_usage_increase_max} samples",
            actual=delta,
            passed=delta <= baselines.cpu_usage_increase_max,
            suggestion=(
                f"- **High CPU Usage:** The CPU usage increased significantly ({delta} samples). "
                f"Consider using the CPU profiler in DevTools to identify potential bottlenecks "
                f"and optimize your code."
            )
        )
    )
    return checks


def collect_suggestions(checks: list[MetricCheck]) -> list[str]:
    """
    Suggestions for every failed check, in the fixed suggestion order.

    Returns the single no-issues sentence when nothing failed.
    """
    by_key = {check.key: check for check in checks}
    suggestions = []
    for key in SUGGESTION_ORDER:
        check = by_key.get(key)
        if check is None or check.passed or not check.suggestion:
            continue
        suggestions.append(check.suggestion)
    if not suggestions:
        return [NO_ISSUES_SUGGESTION]
    return suggestions
