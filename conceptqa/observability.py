"""
Observability Module
====================

Timing metrics for engine operations and the per-query reasoning trace.

No external dependencies: timings come from ``time.perf_counter`` and
trace entries are mirrored to the standard ``logging`` module.

Example:
    from conceptqa import QAEngine

    engine = QAEngine(enable_metrics=True)
    engine.find_answer("The cat sat on the mat.", "Where did the cat sit?")
    print(engine.get_metrics_summary())
    print(engine.reasoning_trace)

Logging Configuration:
    # See every trace entry as it is recorded
    logging.getLogger('conceptqa.observability').setLevel(logging.DEBUG)

    # Structural events only (network rebuilds, learned rules, adaptation)
    logging.getLogger('conceptqa').setLevel(logging.INFO)
"""

import functools
import logging
import time
from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)


class MetricsCollector:
    """
    Collects timing and count metrics for named operations.

    Note: This class is not thread-safe. Timings recorded from several
    threads at once may interleave.

    Attributes:
        enabled: Whether metrics collection is active
        operations: Operation name -> timing/count data
        max_timing_history: Timing entries kept per operation
    """

    def __init__(self, enabled: bool = True, max_timing_history: int = 1000):
        self.enabled = enabled
        self.max_timing_history = max_timing_history
        max_history = max_timing_history
        self.operations: Dict[str, Dict[str, Any]] = defaultdict(lambda: {
            'count': 0,
            'total_ms': 0.0,
            'min_ms': float('inf'),
            'max_ms': 0.0,
            'timings': deque(maxlen=max_history if max_history > 0 else 0),
        })
        self.counts: Dict[str, int] = defaultdict(int)

    def record_timing(self, operation: str, duration_ms: float) -> None:
        """Record one duration (milliseconds) for an operation."""
        if not self.enabled:
            return
        op_data = self.operations[operation]
        op_data['count'] += 1
        op_data['total_ms'] += duration_ms
        op_data['min_ms'] = min(op_data['min_ms'], duration_ms)
        op_data['max_ms'] = max(op_data['max_ms'], duration_ms)
        op_data['timings'].append(duration_ms)

    def record_count(self, metric_name: str, count: int = 1) -> None:
        """Add to a simple counter (e.g. "network_rebuilds")."""
        if not self.enabled:
            return
        self.counts[metric_name] += count

    def get_operation_stats(self, operation: str) -> Dict[str, Any]:
        """
        Statistics for one timed operation or counter.

        Returns:
            Dict with count, total_ms, avg_ms, min_ms, max_ms for timings,
            or just count for counters; empty when unknown
        """
        if operation in self.operations:
            op_data = self.operations[operation]
            count = op_data['count']
            return {
                'count': count,
                'total_ms': op_data['total_ms'],
                'avg_ms': op_data['total_ms'] / count if count else 0.0,
                'min_ms': op_data['min_ms'] if op_data['min_ms'] != float('inf') else 0.0,
                'max_ms': op_data['max_ms'],
            }
        if operation in self.counts:
            return {'count': self.counts[operation]}
        return {}

    def get_all_stats(self) -> Dict[str, Dict[str, Any]]:
        names = list(self.operations) + [c for c in self.counts if c not in self.operations]
        return {name: self.get_operation_stats(name) for name in names}

    def reset(self) -> None:
        """Clear all collected metrics."""
        self.operations.clear()
        self.counts.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def get_summary(self) -> str:
        """Human-readable table of all metrics."""
        if not self.operations and not self.counts:
            return "No metrics collected."

        lines = ["Metrics Summary", "=" * 80]
        if self.operations:
            lines.append("\nTiming Operations:")
            lines.append(f"{'Operation':<30} {'Count':>8} {'Avg(ms)':>10} {'Min(ms)':>10} "
                         f"{'Max(ms)':>10} {'Total(ms)':>12}")
            lines.append("-" * 80)
            for op_name in sorted(self.operations):
                stats = self.get_operation_stats(op_name)
                lines.append(
                    f"{op_name:<30} {stats['count']:>8} "
                    f"{stats['avg_ms']:>10.2f} {stats['min_ms']:>10.2f} "
                    f"{stats['max_ms']:>10.2f} {stats['total_ms']:>12.2f}"
                )
        if self.counts:
            lines.append("\nCount Metrics:")
            lines.append(f"{'Metric':<40} {'Count':>10}")
            lines.append("-" * 50)
            for name in sorted(self.counts):
                lines.append(f"{name:<40} {self.counts[name]:>10}")
        return "\n".join(lines)


def timed(operation_name: Optional[str] = None):
    """
    Decorator for timing method calls into ``self._metrics``.

    Example:
        >>> class Engine:
        ...     @timed("find_answer")
        ...     def find_answer(self, context, question):
        ...         ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            metrics = getattr(self, '_metrics', None)
            if not metrics or not metrics.enabled:
                return func(self, *args, **kwargs)
            start = time.perf_counter()
            try:
                return func(self, *args, **kwargs)
            finally:
                metrics.record_timing(op_name, (time.perf_counter() - start) * 1000.0)

        return wrapper
    return decorator


class ReasoningTrace:
    """
    Ordered, human-readable log of one query's reasoning.

    Records seeding, every activation increase, rule firings, ontology
    integration and parameter changes. Entries are for people reading a
    debug view; callers should not parse them.

    Attributes:
        entries: Messages in the order they were recorded
        max_entries: Entries kept before older ones are dropped
    """

    def __init__(self, max_entries: int = 5000):
        self.max_entries = max_entries
        self.entries: Deque[str] = deque(maxlen=max_entries)

    def log(self, message: str) -> None:
        self.entries.append(message)
        logger.debug(message)

    def section(self, title: str) -> None:
        self.log(f"--- {title} ---")

    def clear(self) -> None:
        self.entries.clear()

    def lines(self) -> List[str]:
        return list(self.entries)

    def render(self) -> str:
        return "\n".join(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return self.render()
