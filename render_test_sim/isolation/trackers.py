"""Resource and performance tracking for isolated test runs.

Both trackers read the number of live simulated browsers from an
:class:`~render_test_sim.driver.registry.InstanceRegistry`; memory figures are
estimates derived from that count, not measurements of the simulation.
:class:`PerformanceTracker` also records the real process RSS via psutil.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import psutil

from ..core.constants import (
    MEMORY_PER_INSTANCE_MB,
    SAMPLING_INTERVAL_MS,
    TARGET_FRAME_TIME_MS,
    TOTAL_MEMORY_MB,
)
from ..driver.registry import InstanceRegistry, default_registry

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000.0


class ResourceTracker:
    """Counts driver instances created between ``start_tracking`` and ``stop_tracking``."""

    def __init__(
        self,
        registry: Optional[InstanceRegistry] = None,
        memory_per_instance_mb: float = MEMORY_PER_INSTANCE_MB,
    ):
        self.registry = registry if registry is not None else default_registry
        self.memory_per_instance_mb = memory_per_instance_mb
        self._tracking = False
        self._start_instances = 0
        self._usage: Dict[str, Any] = {
            "browser_instances": 0,
            "memory_estimate": 0.0,
            "start_time": None,
            "end_time": None,
        }

    @property
    def is_tracking(self) -> bool:
        return self._tracking

    def start_tracking(self) -> None:
        self._tracking = True
        self._start_instances = self.registry.count()
        self._usage["start_time"] = _now_ms()
        self._usage["end_time"] = None

    def stop_tracking(self) -> None:
        if not self._tracking:
            return
        delta = self.registry.count() - self._start_instances
        self._usage["end_time"] = _now_ms()
        self._usage["browser_instances"] = delta
        self._usage["memory_estimate"] = delta * self.memory_per_instance_mb
        self._tracking = False
        logger.debug("Resource tracking stopped: %d instance(s) created", delta)

    def estimate_memory_usage(self) -> float:
        """Estimated MB held by every live instance in the registry."""
        return self.registry.count() * self.memory_per_instance_mb

    def get_usage(self) -> Dict[str, Any]:
        return dict(self._usage)


class PerformanceTracker:
    """Samples synthetic CPU, memory and frame-time series on a background thread.

    Args:
        registry: Source of the active-instance count for memory estimates.
        interval_ms: Sampling period of the background loop.
        seed: Seed of the numpy generator behind the synthetic CPU and
            frame-time values.
    """

    def __init__(
        self,
        registry: Optional[InstanceRegistry] = None,
        interval_ms: float = SAMPLING_INTERVAL_MS,
        seed: Optional[int] = None,
        memory_per_instance_mb: float = MEMORY_PER_INSTANCE_MB,
    ):
        self.registry = registry if registry is not None else default_registry
        self.interval_ms = interval_ms
        self.memory_per_instance_mb = memory_per_instance_mb
        self._rng = np.random.default_rng(seed)
        self._process = psutil.Process()
        self._lock = threading.Lock()
        self._commands: "queue.Queue[str]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._tracking = False
        self.metrics: Dict[str, Any] = self._empty_metrics()

    @staticmethod
    def _empty_metrics() -> Dict[str, Any]:
        return {
            "start_time": None,
            "end_time": None,
            "duration": None,
            "cpu_usage": [],
            "memory_snapshots": [],
            "frame_timings": [],
        }

    @property
    def is_tracking(self) -> bool:
        return self._tracking

    def start_tracking(self) -> None:
        if self._tracking:
            return
        self.metrics = self._empty_metrics()
        self.metrics["start_time"] = time.perf_counter() * 1000.0
        self._tracking = True
        self._commands = queue.Queue()

        interval_s = self.interval_ms / 1000.0

        def _loop() -> None:
            while self._tracking:
                try:
                    command = self._commands.get(timeout=interval_s)
                    if command == "stop":
                        break
                except queue.Empty:
                    if self._tracking:
                        self.collect_metrics()

        self._thread = threading.Thread(
            target=_loop, name="render-test-sim-performance", daemon=True
        )
        self._thread.start()

    def stop_tracking(self) -> None:
        if not self._tracking:
            return
        self._tracking = False
        self._commands.put("stop")
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=2.0)
        self._thread = None
        end_time = time.perf_counter() * 1000.0
        self.metrics["end_time"] = end_time
        self.metrics["duration"] = end_time - self.metrics["start_time"]
        logger.debug(
            "Performance tracking stopped after %.1f ms (%d samples)",
            self.metrics["duration"],
            len(self.metrics["cpu_usage"]),
        )

    def collect_metrics(self) -> None:
        """Record one sample of each series."""
        now = time.perf_counter() * 1000.0
        rss_mb = self._process.memory_info().rss / (1024 * 1024)
        with self._lock:
            self.metrics["cpu_usage"].append(
                {"timestamp": now, "usage": float(self._rng.uniform(0.0, 100.0))}
            )
            self.metrics["memory_snapshots"].append(
                {
                    "timestamp": now,
                    "used": self.registry.count() * self.memory_per_instance_mb,
                    "total": TOTAL_MEMORY_MB,
                    "rss_mb": rss_mb,
                }
            )
            self.metrics["frame_timings"].append(
                {
                    "timestamp": now,
                    "frame_time": TARGET_FRAME_TIME_MS + float(self._rng.uniform(-1.0, 1.0)),
                }
            )

    def get_info(self) -> Dict[str, Any]:
        with self._lock:
            info = {
                key: list(value) if isinstance(value, list) else value
                for key, value in self.metrics.items()
            }
        info["average_cpu_usage"] = self.calculate_average(info["cpu_usage"], "usage")
        info["average_memory_usage"] = self.calculate_average(info["memory_snapshots"], "used")
        info["average_frame_time"] = self.calculate_average(info["frame_timings"], "frame_time")
        return info

    @staticmethod
    def calculate_average(samples: Sequence[Any], key: Optional[str] = None) -> float:
        """Mean of ``samples`` (or of ``sample[key]``); 0 for an empty sequence."""
        if len(samples) == 0:
            return 0
        values: List[float] = [s[key] for s in samples] if key is not None else list(samples)
        return float(np.mean(values))


__all__ = ["ResourceTracker", "PerformanceTracker"]
