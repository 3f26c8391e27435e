"""Turn a Flutter driver response into a saved performance report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from perf_driver.baselines import PerformanceBaselines
from perf_driver.models import UNKNOWN_OS, DeviceSnapshot, FrameStatistics
from perf_driver.report import (
    PerformanceReport,
    build_report,
    report_directory,
    report_filename,
    save_report,
    write_timeline
)
from perf_driver.summarizer import summarize_timeline


logger = logging.getLogger(__name__)

DEFAULT_REPORT_KEY = "widget_build"
DEFAULT_REPORT_ROOT = "performance_report"


@dataclass(frozen=True)
class ReportResult:
    report: PerformanceReport
    report_path: Path
    timeline_paths: list[Path] = field(default_factory=list)


def build_testing_data(response: dict[str, Any], report_key: str = DEFAULT_REPORT_KEY) -> dict[str, Any]:
    """
    Summarize the traced timeline in a driver response into testing data.

    A response that already carries a "performance" mapping is returned
    unchanged. Device groups are passed through when present.

    Raises:
        ValueError: if the response has neither performance data nor a timeline
    """
    if "performance" in response:
        return response

    timeline = response.get(report_key)
    if timeline is None:
        raise ValueError(f"Driver response has no performance data and no '{report_key}' timeline")

    stats = summarize_timeline(timeline)
    testing_data = {
        "performance": stats.to_performance(),
        "frame_rate_info": stats.frame_rate_info()
    }
    for key in ("device_details", "cpu_usage", "memory_usage"):
        if key in response:
            testing_data[key] = response[key]
    return testing_data


def process_response(
    response: dict[str, Any] | None,
    baselines: PerformanceBaselines | None = None,
    report_root: str | Path = DEFAULT_REPORT_ROOT,
    timeline_dir: str | Path | None = None,
    report_key: str = DEFAULT_REPORT_KEY,
    now: datetime | None = None
) -> ReportResult | None:
    """
    Generate and save the report for one driver response.

    Args:
        response: Data reported by the integration test, or None
        baselines: Thresholds to judge against; defaults when None
        report_root: Reports go to <report_root>/<operating_system>/
        timeline_dir: When set, the raw timeline and its summary are exported here
        report_key: Key of the timeline in the response
        now: Timestamp for the report filename

    Returns:
        ReportResult, or None when no data was received
    """
    if response is None:
        logger.warning("No data received")
        return None

    baselines = baselines or PerformanceBaselines()
    testing_data = build_testing_data(response, report_key)

    stats = FrameStatistics.from_performance(
        testing_data["performance"],
        testing_data.get("frame_rate_info")
    )
    device = DeviceSnapshot.from_report_data(testing_data)
    report = build_report(stats, baselines, device)

    operating_system = device.operating_system if device is not None else UNKNOWN_OS
    report_path = save_report(
        report.markdown,
        report_filename(now),
        report_directory(report_root, operating_system)
    )

    timeline_paths = []
    timeline = response.get(report_key)
    if timeline_dir is not None and timeline is not None:
        timeline_paths = write_timeline(timeline, report_key, timeline_dir, stats)

    if not report.passed:
        logger.info("Performance report has failing metrics: %s", report_path)

    return ReportResult(report=report, report_path=report_path, timeline_paths=timeline_paths)
