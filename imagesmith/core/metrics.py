"""
imagesmith Core - Metrics collection.

In-memory metrics for build pipeline runs. No external backends.

Metrics:
- imagesmith_step_executions: Step forward actions by step and outcome
- imagesmith_step_duration_seconds: Step forward action duration
- imagesmith_retry_attempts_total: Retries performed by RetryPolicy
- imagesmith_cleanup_failures_total: Resources left behind after cleanup
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Any

from loguru import logger

from imagesmith.utils.logger import log_prefix


def _label_key(labels: dict[str, str]) -> str:
    return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))


@dataclass
class Counter:
    """Simple counter metric."""

    name: str
    value: int = 0
    labels: dict[str, int] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def inc(self, amount: int = 1, **labels: str) -> None:
        """
        Increment counter.

        Labelled increments are tracked per label set and also
        added to the total value.

        Args:
            amount: Amount to increment (default: 1)
            **labels: Optional labels (e.g., step="security_group", status="halt")
        """
        with self._lock:
            self.value += amount
            if labels:
                key = _label_key(labels)
                self.labels[key] = self.labels.get(key, 0) + amount

    def get(self, **labels: str) -> int:
        """Get counter value, optionally for one label set."""
        with self._lock:
            if labels:
                return self.labels.get(_label_key(labels), 0)
            return self.value

    def reset(self) -> None:
        """Reset counter to zero."""
        with self._lock:
            self.value = 0
            self.labels.clear()


@dataclass
class Histogram:
    """Duration histogram with a sliding window of observations."""

    name: str
    observations: list[float] = field(default_factory=list)
    max_observations: int = 1000
    _lock: Lock = field(default_factory=Lock, repr=False)

    def observe(self, value: float) -> None:
        """Record an observation."""
        with self._lock:
            self.observations.append(value)
            if len(self.observations) > self.max_observations:
                self.observations = self.observations[-self.max_observations :]

    def get_stats(self) -> dict[str, Any]:
        """Get count, sum, min, max and avg of the observations."""
        with self._lock:
            if not self.observations:
                return {"count": 0, "sum": 0.0, "min": 0.0, "max": 0.0, "avg": 0.0}

            total = sum(self.observations)
            count = len(self.observations)
            return {
                "count": count,
                "sum": total,
                "min": min(self.observations),
                "max": max(self.observations),
                "avg": total / count,
            }

    def reset(self) -> None:
        """Reset histogram observations."""
        with self._lock:
            self.observations.clear()


class MetricsRegistry:
    """
    Registry for all metrics.

    Thread-safe in-memory metrics storage.
    """

    def __init__(self) -> None:
        self._counters: dict[str, Counter] = {}
        self._histograms: dict[str, Histogram] = {}
        self._lock = Lock()

    def counter(self, name: str) -> Counter:
        """Get or create a counter metric."""
        with self._lock:
            if name not in self._counters:
                self._counters[name] = Counter(name=name)
            return self._counters[name]

    def histogram(self, name: str) -> Histogram:
        """Get or create a histogram metric."""
        with self._lock:
            if name not in self._histograms:
                self._histograms[name] = Histogram(name=name)
            return self._histograms[name]

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            for counter in self._counters.values():
                counter.reset()
            for histogram in self._histograms.values():
                histogram.reset()


# Global metrics registry
_registry = MetricsRegistry()


def get_registry() -> MetricsRegistry:
    """Get global metrics registry."""
    return _registry


def reset_metrics() -> None:
    """Reset all metrics in global registry."""
    _registry.reset()


def track_step_execution(step: str, duration: float, status: str) -> None:
    """
    Track a step forward action.

    Args:
        step: Step name (e.g., "security_group")
        duration: Duration in seconds
        status: Step outcome ("continue", "halt", "error")
    """
    _registry.counter("imagesmith_step_executions").inc(step=step, status=status)
    _registry.histogram("imagesmith_step_duration_seconds").observe(duration)


def track_cleanup_failure(resource_type: str) -> None:
    """Track a resource that cleanup could not delete."""
    _registry.counter("imagesmith_cleanup_failures_total").inc(resource_type=resource_type)


class timing:
    """
    Context manager for timing operations.

    Example:
        with timing("create_security_group") as t:
            client.create_security_group(...)
        logger.debug(f"Create took {t.duration:.2f}s")
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.start_time: float = 0.0
        self.duration: float = 0.0

    def __enter__(self) -> timing:
        self.start_time = time.monotonic()
        return self

    def __exit__(self, *args: Any) -> None:
        self.duration = time.monotonic() - self.start_time
        logger.debug(f"{log_prefix('⏱️')} {self.operation} took {self.duration:.2f}s")
