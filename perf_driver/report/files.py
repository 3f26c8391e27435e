"""Writing reports and timelines to disk."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from perf_driver.models import FrameStatistics


logger = logging.getLogger(__name__)


def report_filename(now: datetime | None = None) -> str:
    return f"{(now or datetime.now()).isoformat()}.md"


def report_directory(root: str | Path, operating_system: str) -> Path:
    return Path(root) / operating_system


def save_report(text: str, filename: str, directory: str | Path) -> Path:
    """
    Write a report into directory, creating it if needed.

    The text goes to a temporary sibling first and is moved into place, so a
    failed write never leaves a partial report behind.

    Raises:
        OSError: if the directory cannot be created or the file cannot be written
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / filename
    tmp = target_dir / f"{filename}.tmp"
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    logger.info("Markdown file saved as %s", path)
    return path


def write_timeline(
    timeline: dict[str, Any],
    name: str,
    directory: str | Path,
    stats: FrameStatistics | None = None
) -> list[Path]:
    """
    Export the raw timeline, and optionally its summary, for later inspection.

    Writes <name>.timeline.json and, when stats are given,
    <name>.timeline_summary.json.
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)

    written = []
    timeline_path = target_dir / f"{name}.timeline.json"
    with open(timeline_path, "w", encoding="utf-8") as f:
        json.dump(timeline, f, indent=2)
    written.append(timeline_path)

    if stats is not None:
        summary_path = target_dir / f"{name}.timeline_summary.json"
        summary = dict(stats.to_performance())
        summary["frame_rate_info"] = stats.frame_rate_info()
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2)
        written.append(summary_path)

    logger.info("Timeline written to %s", target_dir)
    return written
