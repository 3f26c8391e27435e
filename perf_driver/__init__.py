"""Frame-timing performance reports for Flutter integration tests."""

from perf_driver.baselines import PerformanceBaselines, load_baselines
from perf_driver.driver import ReportResult, build_testing_data, process_response
from perf_driver.models import DeviceSnapshot, FrameStatistics, TelemetryReading
from perf_driver.report import build_report, generate_report, save_report
from perf_driver.summarizer import summarize_timeline

__all__ = [
    "DeviceSnapshot",
    "FrameStatistics",
    "PerformanceBaselines",
    "ReportResult",
    "TelemetryReading",
    "build_report",
    "build_testing_data",
    "generate_report",
    "load_baselines",
    "process_response",
    "save_report",
    "summarize_timeline"
]
