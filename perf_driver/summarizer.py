"""Reduce a Flutter timeline trace into frame statistics."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from perf_driver.models import FRAME_RATE_LABELS, FrameStatistics, round_half_up


logger = logging.getLogger(__name__)

BUILD_EVENT_NAME = "Frame"
RASTER_EVENT_NAME = "GPURasterizer::Draw"
VSYNC_EVENT_NAME = "VsyncProcessCallback"

FRAME_BUDGET_MS = 16.0
REFRESH_RATE_MARGIN_HZ = 6.0
MICROS_PER_SECOND = 1e6
REFRESH_RATES_HZ = {label: float(label[:-2]) for label in FRAME_RATE_LABELS}


def load_timeline(path: str | Path) -> dict[str, Any]:
    """Load a Chrome trace JSON timeline written by the Flutter driver."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _events(timeline: dict[str, Any] | list) -> list[dict]:
    if isinstance(timeline, list):
        events = timeline
    else:
        events = timeline.get("traceEvents") or []
    ordered = [event for event in events if isinstance(event, dict) and event.get("ts") is not None]
    return sorted(ordered, key=lambda event: event["ts"])


def extract_durations(events: list[dict], name: str) -> list[float]:
    """
    Collect durations in milliseconds for events with the given name.

    Begin events are matched with the next end event; complete ("X") events
    contribute their own duration. A begin without a matching end is dropped.
    """
    durations = []
    begin = None
    for event in events:
        if event.get("name") != name:
            continue
        phase = event.get("ph")
        if phase == "X":
            if event.get("dur") is not None:
                durations.append(event["dur"] / 1000.0)
        elif phase == "B":
            begin = event
        elif phase == "E" and begin is not None:
            durations.append((event["ts"] - begin["ts"]) / 1000.0)
            begin = None
    return durations


def percentile(values: list[float], p: float) -> float:
    if not values:
        return 0.0
    sorted_values = sorted(values)
    index = round_half_up((len(sorted_values) - 1) * (p / 100))
    return sorted_values[index]


def _average(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _worst(values: list[float]) -> float:
    if not values:
        return 0.0
    return max(values)


def _missed_budget(values: list[float]) -> int:
    return len([value for value in values if value > FRAME_BUDGET_MS])


def compute_refresh_rate_percentages(events: list[dict]) -> dict[str, float]:
    """
    Compute the share of vsync frames consistent with each known refresh rate.
    """
    rates = []
    for event in events:
        if event.get("name") != VSYNC_EVENT_NAME or event.get("ph") != "B":
            continue
        args = event.get("args") or {}
        if args.get("StartTime") is None or args.get("TargetTime") is None:
            continue
        duration = int(args["TargetTime"]) - int(args["StartTime"])
        if duration <= 0:
            continue
        rates.append(MICROS_PER_SECOND / duration)

    if not rates:
        return {label: 0.0 for label in FRAME_RATE_LABELS}

    percentages = {}
    for label, target in REFRESH_RATES_HZ.items():
        count = len([rate for rate in rates if abs(rate - target) < REFRESH_RATE_MARGIN_HZ])
        percentages[label] = count * 100 / len(rates)
    return percentages


def summarize_timeline(timeline: dict[str, Any] | list) -> FrameStatistics:
    """
    Reduce a timeline to frame build/raster statistics.

    Args:
        timeline: Chrome trace JSON object (or its bare event list)

    Returns:
        FrameStatistics for the whole timeline
    """
    events = _events(timeline)
    build = extract_durations(events, BUILD_EVENT_NAME)
    raster = extract_durations(events, RASTER_EVENT_NAME)

    if not build:
        logger.warning("No %s events found; build statistics default to zero", BUILD_EVENT_NAME)
    if not raster:
        logger.warning("No %s events found; raster statistics default to zero", RASTER_EVENT_NAME)

    return FrameStatistics(
        p90_build_ms=percentile(build, 90),
        p95_build_ms=percentile(build, 95),
        p99_build_ms=percentile(build, 99),
        average_build_ms=_average(build),
        worst_build_ms=_worst(build),
        missed_build_budget_count=_missed_budget(build),
        total_frames=len(build),
        p90_raster_ms=percentile(raster, 90),
        p95_raster_ms=percentile(raster, 95),
        p99_raster_ms=percentile(raster, 99),
        average_raster_ms=_average(raster),
        worst_raster_ms=_worst(raster),
        missed_raster_budget_count=_missed_budget(raster),
        total_rasterizer_frames=len(raster),
        frame_rates=compute_refresh_rate_percentages(events)
    )
