"""Per-aggregate memo of computed coverage metrics.

Each RequirementsOutcomes instance owns one MetricCache. The aggregate never
changes after construction, so cached values stay valid for its lifetime and
the cache has no invalidation.
"""

import threading
from collections.abc import Callable
from enum import StrEnum
from typing import Final

__all__ = ["CoverageMetric", "MetricCache"]


class CoverageMetric(StrEnum):
    """Cacheable scalar metrics of an aggregate. One slot per member."""

    COMPLETED_REQUIREMENTS = "completed_requirements"
    ERROR_REQUIREMENTS = "error_requirements"
    FAILING_REQUIREMENTS = "failing_requirements"
    PENDING_REQUIREMENTS = "pending_requirements"
    COMPROMISED_REQUIREMENTS = "compromised_requirements"
    IGNORED_REQUIREMENTS = "ignored_requirements"
    REQUIREMENTS_WITHOUT_TESTS = "requirements_without_tests"
    FLATTENED_REQUIREMENTS = "flattened_requirements"


class MetricCache:
    """Thread-safe map from CoverageMetric to a computed integer.

    Concurrent first requests for the same metric may both compute it; the
    first value stored wins and is returned to every caller.
    """

    __slots__: Final = ("_lock", "_values")

    def __init__(self) -> None:
        self._values: dict[CoverageMetric, int] = {}
        self._lock = threading.Lock()

    def get(self, metric: CoverageMetric) -> int | None:
        with self._lock:
            return self._values.get(metric)

    def get_or_compute(self, metric: CoverageMetric, compute: Callable[[], int]) -> int:
        """Return the cached value for a metric, computing it on first use.

        The computation runs outside the lock and may itself read other
        metrics.
        """
        with self._lock:
            if metric in self._values:
                return self._values[metric]

        value = compute()

        with self._lock:
            return self._values.setdefault(metric, value)

    def __contains__(self, metric: object) -> bool:
        with self._lock:
            return metric in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
