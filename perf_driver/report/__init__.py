"""Report generation: judgments, suggestions, markdown and file output."""

from perf_driver.report.checks import (
    NO_ISSUES_SUGGESTION,
    MetricCheck,
    collect_suggestions,
    percent_budget_count,
    within_missed_budget
)
from perf_driver.report.files import report_directory, report_filename, save_report, write_timeline
from perf_driver.report.markdown import (
    FAIL_GLYPH,
    PASS_GLYPH,
    PerformanceReport,
    build_report,
    generate_report
)

__all__ = [
    "FAIL_GLYPH",
    "MetricCheck",
    "NO_ISSUES_SUGGESTION",
    "PASS_GLYPH",
    "PerformanceReport",
    "build_report",
    "collect_suggestions",
    "generate_report",
    "percent_budget_count",
    "report_directory",
    "report_filename",
    "save_report",
    "within_missed_budget",
    "write_timeline"
]
