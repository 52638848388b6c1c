"""
Test suite for resource and performance tracking.

This module validates:
- Instance deltas and memory estimates of ResourceTracker
- Sample collection, averages and the background sampler of PerformanceTracker
"""

import time

import pytest

from render_test_sim.core.constants import MEMORY_PER_INSTANCE_MB, TARGET_FRAME_TIME_MS, TOTAL_MEMORY_MB
from render_test_sim.driver import SimulatedBrowserManager
from render_test_sim.isolation import PerformanceTracker, ResourceTracker


class TestResourceTracker:
    def test_counts_instances_created_while_tracking(self, registry):
        tracker = ResourceTracker(registry)
        tracker.start_tracking()
        for _ in range(3):
            SimulatedBrowserManager(registry=registry).initialize()
        tracker.stop_tracking()

        usage = tracker.get_usage()
        assert usage["browser_instances"] == 3
        assert usage["memory_estimate"] == 3 * MEMORY_PER_INSTANCE_MB
        assert usage["end_time"] >= usage["start_time"]

    def test_preexisting_instances_are_not_counted(self, registry):
        SimulatedBrowserManager(registry=registry).initialize()
        tracker = ResourceTracker(registry)
        tracker.start_tracking()
        SimulatedBrowserManager(registry=registry).initialize()
        tracker.stop_tracking()
        assert tracker.get_usage()["browser_instances"] == 1

    def test_stop_without_start_is_noop(self, registry):
        tracker = ResourceTracker(registry)
        tracker.stop_tracking()
        assert tracker.get_usage() == {
            "browser_instances": 0,
            "memory_estimate": 0.0,
            "start_time": None,
            "end_time": None,
        }
        assert not tracker.is_tracking

    def test_estimate_memory_usage(self, registry):
        tracker = ResourceTracker(registry, memory_per_instance_mb=10)
        assert tracker.estimate_memory_usage() == 0
        SimulatedBrowserManager(registry=registry).initialize()
        SimulatedBrowserManager(registry=registry).initialize()
        assert tracker.estimate_memory_usage() == 20

    def test_usage_is_a_copy(self, registry):
        tracker = ResourceTracker(registry)
        usage = tracker.get_usage()
        usage["browser_instances"] = 99
        assert tracker.get_usage()["browser_instances"] == 0

    def test_restart_clears_end_time(self, registry):
        tracker = ResourceTracker(registry)
        tracker.start_tracking()
        tracker.stop_tracking()
        tracker.start_tracking()
        assert tracker.is_tracking
        assert tracker.get_usage()["end_time"] is None


class TestPerformanceTracker:
    @pytest.mark.parametrize(
        "samples, key, expected",
        [
            ([], None, 0),
            ([], "usage", 0),
            ([1, 2, 3], None, 2.0),
            ([{"usage": 10.0}, {"usage": 30.0}], "usage", 20.0),
        ],
    )
    def test_calculate_average(self, samples, key, expected):
        assert PerformanceTracker.calculate_average(samples, key) == expected

    def test_collect_metrics_appends_samples(self, registry):
        SimulatedBrowserManager(registry=registry).initialize()
        tracker = PerformanceTracker(registry, seed=1)
        tracker.collect_metrics()
        tracker.collect_metrics()

        info = tracker.get_info()
        assert len(info["cpu_usage"]) == 2
        assert all(0.0 <= sample["usage"] <= 100.0 for sample in info["cpu_usage"])
        snapshot = info["memory_snapshots"][0]
        assert snapshot["used"] == MEMORY_PER_INSTANCE_MB
        assert snapshot["total"] == TOTAL_MEMORY_MB
        assert snapshot["rss_mb"] > 0
        assert all(
            abs(sample["frame_time"] - TARGET_FRAME_TIME_MS) <= 1.0 for sample in info["frame_timings"]
        )
        assert info["average_memory_usage"] == MEMORY_PER_INSTANCE_MB

    def test_seeded_samples_are_reproducible(self, registry):
        first = PerformanceTracker(registry, seed=5)
        second = PerformanceTracker(registry, seed=5)
        for tracker in (first, second):
            tracker.collect_metrics()
            tracker.collect_metrics()
        usages = [[s["usage"] for s in t.get_info()["cpu_usage"]] for t in (first, second)]
        assert usages[0] == usages[1]

    def test_info_without_samples(self, registry):
        info = PerformanceTracker(registry).get_info()
        assert info["average_cpu_usage"] == 0
        assert info["average_frame_time"] == 0
        assert info["duration"] is None

    def test_background_sampling(self, registry):
        tracker = PerformanceTracker(registry, interval_ms=5, seed=3)
        tracker.start_tracking()
        tracker.start_tracking()
        assert tracker.is_tracking
        time.sleep(0.1)
        tracker.stop_tracking()

        info = tracker.get_info()
        assert not tracker.is_tracking
        assert len(info["cpu_usage"]) >= 1
        assert info["duration"] >= 0
        assert info["end_time"] >= info["start_time"]

        # no samples after stop
        count = len(info["cpu_usage"])
        time.sleep(0.02)
        assert len(tracker.get_info()["cpu_usage"]) == count

    def test_stop_without_start_is_noop(self, registry):
        tracker = PerformanceTracker(registry)
        tracker.stop_tracking()
        assert tracker.get_info()["end_time"] is None

    def test_restart_resets_metrics(self, registry):
        tracker = PerformanceTracker(registry, interval_ms=1000)
        tracker.collect_metrics()
        tracker.start_tracking()
        tracker.stop_tracking()
        assert tracker.get_info()["cpu_usage"] == []
