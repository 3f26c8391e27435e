"""Markdown rendering of the performance report."""

from __future__ import annotations

from dataclasses import dataclass

from perf_driver.baselines import PerformanceBaselines
from perf_driver.models import FRAME_RATE_LABELS, DeviceSnapshot, FrameStatistics
from perf_driver.report.checks import (
    MetricCheck,
    collect_suggestions,
    device_checks,
    raster_thread_checks,
    ui_thread_checks
)


PASS_GLYPH = "✅"
FAIL_GLYPH = "❌"
NO_FRAME_RATE_DATA = "No frame rate data"


@dataclass(frozen=True)
class PerformanceReport:
    markdown: str
    checks: tuple[MetricCheck, ...]
    suggestions: tuple[str, ...]

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)


def status_glyph(passed: bool) -> str:
    return PASS_GLYPH if passed else FAIL_GLYPH


def render_frame_rates(frame_rates: dict[str, float] | None) -> list[str]:
    lines = [
        f"- {label}: {frame_rates[label]}%"
        for label in FRAME_RATE_LABELS
        if frame_rates and (frame_rates.get(label) or 0) > 0
    ]
    return lines or [NO_FRAME_RATE_DATA]


def _render_table(title: str, actual_header: str, checks: list[MetricCheck]) -> list[str]:
    lines = [
        f"### {title}",
        "",
        f"| Metric | Baseline | {actual_header} | Status |",
        "|--------|----------|--------|--------|",
    ]
    for check in checks:
        lines.append(f"| {check.label} | {check.baseline} | {check.actual} | {status_glyph(check.passed)} |")
    lines.append("")
    return lines


def build_report(
    stats: FrameStatistics,
    baselines: PerformanceBaselines,
    device: DeviceSnapshot | None = None
) -> PerformanceReport:
    """
    Judge statistics against baselines and render the markdown report.

    Args:
        stats: Frame statistics of the completed trace
        baselines: Thresholds for this run
        device: Optional before/after telemetry; device sections are omitted without it

    Returns:
        PerformanceReport with the markdown text, checks and suggestions
    """
    ui_checks = ui_thread_checks(stats, baselines)
    raster_checks = raster_thread_checks(stats, baselines)
    extra_checks = device_checks(device, baselines) if device is not None else []
    checks = ui_checks + raster_checks + extra_checks
    suggestions = collect_suggestions(checks)

    lines = ["# Performance Report", ""]

    if device is not None:
        lines.append("## Device Details:")
        lines.append(f"- Operating System: {device.operating_system}")
        lines.append("")

    lines.append("## Frame Rate Information:")
    lines.extend(render_frame_rates(stats.frame_rates))
    lines.append("")

    lines.append("## Suggestions:")
    lines.extend(suggestions)
    lines.append("")

    lines.extend(_render_table("UI Thread Performance", "Actual (UI)", ui_checks))
    lines.extend(_render_table("Raster Thread Performance", "Actual (Raster)", raster_checks))
    if device is not None:
        lines.extend(_render_table("Device Performance", "Actual", extra_checks))

    return PerformanceReport(
        markdown="\n".join(lines).strip() + "\n",
        checks=tuple(checks),
        suggestions=tuple(suggestions)
    )


def generate_report(
    stats: FrameStatistics,
    baselines: PerformanceBaselines,
    device: DeviceSnapshot | None = None
) -> str:
    """Render the markdown report text; same inputs always give the same text."""
    return build_report(stats, baselines, device).markdown
