import unittest

from perf_driver.summarizer import (
    compute_refresh_rate_percentages,
    extract_durations,
    percentile,
    summarize_timeline
)


def begin_end(name: str, start_us: int, dur_us: int) -> list[dict]:
    return [
        {"name": name, "ph": "B", "ts": start_us, "pid": 1, "tid": 1},
        {"name": name, "ph": "E", "ts": start_us + dur_us, "pid": 1, "tid": 1},
    ]


def vsync(start_us: int, period_us: int) -> dict:
    return {
        "name": "VsyncProcessCallback",
        "ph": "B",
        "ts": start_us,
        "args": {"StartTime": str(start_us), "TargetTime": str(start_us + period_us)}
    }


def timeline_with(build_ms: list[float], raster_ms: list[float], vsync_periods_us: list[int] = ()) -> dict:
    events = []
    ts = 0
    for value in build_ms:
        events.extend(begin_end("Frame", ts, int(value * 1000)))
        ts += 100000
    ts = 50000
    for value in raster_ms:
        events.extend(begin_end("GPURasterizer::Draw", ts, int(value * 1000)))
        ts += 100000
    for index, period in enumerate(vsync_periods_us):
        events.append(vsync(index * 100000, period))
    return {"traceEvents": events}


class TestDurations(unittest.TestCase):
    def test_pairs_begin_with_next_end(self):
        events = begin_end("Frame", 0, 4000) + begin_end("Frame", 10000, 8000)
        self.assertEqual(extract_durations(events, "Frame"), [4.0, 8.0])

    def test_ignores_leading_end_and_unpaired_begin(self):
        events = [
            {"name": "Frame", "ph": "E", "ts": 0},
            {"name": "Frame", "ph": "B", "ts": 10},
            {"name": "Frame", "ph": "E", "ts": 2010},
            {"name": "Frame", "ph": "B", "ts": 5000},
        ]
        self.assertEqual(extract_durations(events, "Frame"), [2.0])

    def test_complete_events(self):
        events = [{"name": "GPURasterizer::Draw", "ph": "X", "ts": 0, "dur": 1500}]
        self.assertEqual(extract_durations(events, "GPURasterizer::Draw"), [1.5])


class TestPercentile(unittest.TestCase):
    def test_nearest_rank_index(self):
        values = [float(value) for value in range(1, 11)]
        # index round(9 * 0.9) = round(8.1) = 8
        self.assertEqual(percentile(values, 90), 9.0)
        # index round(9 * 0.95) = round(8.55) = 9
        self.assertEqual(percentile(values, 95), 10.0)
        self.assertEqual(percentile(values, 50), 6.0)

    def test_empty_is_zero(self):
        self.assertEqual(percentile([], 99), 0.0)


class TestRefreshRates(unittest.TestCase):
    def test_buckets_by_period(self):
        events = [vsync(0, 16667), vsync(1, 16667), vsync(2, 8333), vsync(3, 40000)]
        rates = compute_refresh_rate_percentages(events)
        self.assertEqual(rates["60Hz"], 50.0)
        self.assertEqual(rates["120Hz"], 25.0)
        # 25Hz lies within the 30Hz margin
        self.assertEqual(rates["30Hz"], 25.0)
        self.assertEqual(rates["90Hz"], 0.0)

    def test_no_vsync_events(self):
        self.assertEqual(
            compute_refresh_rate_percentages([]),
            {"30Hz": 0.0, "60Hz": 0.0, "80Hz": 0.0, "90Hz": 0.0, "120Hz": 0.0}
        )


class TestSummarizeTimeline(unittest.TestCase):
    def test_statistics(self):
        build = [2.0, 4.0, 6.0, 8.0, 20.0]
        raster = [1.0, 3.0, 17.0, 18.0]
        stats = summarize_timeline(timeline_with(build, raster, [16667, 16667]))

        self.assertEqual(stats.total_frames, 5)
        self.assertEqual(stats.total_rasterizer_frames, 4)
        self.assertEqual(stats.missed_build_budget_count, 1)
        self.assertEqual(stats.missed_raster_budget_count, 2)
        self.assertAlmostEqual(stats.average_build_ms, 8.0)
        self.assertEqual(stats.worst_build_ms, 20.0)
        self.assertEqual(stats.worst_raster_ms, 18.0)
        self.assertEqual(stats.p90_build_ms, 20.0)
        self.assertEqual(stats.p90_raster_ms, 18.0)
        self.assertEqual(stats.frame_rates["60Hz"], 100.0)

    def test_budget_is_strictly_above_sixteen_ms(self):
        stats = summarize_timeline(timeline_with([16.0, 16.5], [16.0]))
        self.assertEqual(stats.missed_build_budget_count, 1)
        self.assertEqual(stats.missed_raster_budget_count, 0)

    def test_empty_timeline_logs_and_zeroes(self):
        with self.assertLogs("perf_driver.summarizer", level="WARNING"):
            stats = summarize_timeline({"traceEvents": []})
        self.assertEqual(stats.total_frames, 0)
        self.assertEqual(stats.p99_build_ms, 0.0)
        self.assertEqual(stats.average_raster_ms, 0.0)

    def test_accepts_bare_event_list(self):
        stats = summarize_timeline(timeline_with([5.0], [4.0])["traceEvents"])
        self.assertEqual(stats.p95_build_ms, 5.0)
        self.assertEqual(stats.p95_raster_ms, 4.0)


if __name__ == "__main__":
    unittest.main()
