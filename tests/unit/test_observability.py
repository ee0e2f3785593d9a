"""
Unit Tests for Observability
============================

Tests MetricsCollector, the @timed decorator and ReasoningTrace.
"""

import pytest

from conceptqa.observability import MetricsCollector, ReasoningTrace, timed


class TestMetricsCollector:

    def test_record_timing(self):
        metrics = MetricsCollector()
        metrics.record_timing("find_answer", 10.0)
        metrics.record_timing("find_answer", 30.0)
        stats = metrics.get_operation_stats("find_answer")
        assert stats['count'] == 2
        assert stats['avg_ms'] == pytest.approx(20.0)
        assert stats['min_ms'] == 10.0
        assert stats['max_ms'] == 30.0

    def test_counts(self):
        metrics = MetricsCollector()
        metrics.record_count("network_rebuilds")
        metrics.record_count("network_rebuilds", 2)
        assert metrics.get_operation_stats("network_rebuilds") == {'count': 3}
        assert metrics.get_operation_stats("unknown") == {}

    def test_disabled_collects_nothing(self):
        metrics = MetricsCollector(enabled=False)
        metrics.record_timing("op", 1.0)
        metrics.record_count("c")
        assert metrics.get_all_stats() == {}
        metrics.enable()
        metrics.record_count("c")
        assert metrics.get_all_stats() == {'c': {'count': 1}}

    def test_timing_history_is_bounded(self):
        metrics = MetricsCollector(max_timing_history=3)
        for i in range(10):
            metrics.record_timing("op", float(i))
        assert len(metrics.operations["op"]['timings']) == 3
        assert metrics.get_operation_stats("op")['count'] == 10

    def test_summary(self):
        metrics = MetricsCollector()
        assert metrics.get_summary() == "No metrics collected."
        metrics.record_timing("find_answer", 5.0)
        metrics.record_count("rules_learned")
        summary = metrics.get_summary()
        assert "find_answer" in summary
        assert "rules_learned" in summary

    def test_reset(self):
        metrics = MetricsCollector()
        metrics.record_timing("op", 1.0)
        metrics.reset()
        assert metrics.get_all_stats() == {}


class TestTimedDecorator:

    class Worker:
        def __init__(self, metrics):
            self._metrics = metrics

        @timed("work")
        def work(self, value):
            return value * 2

        @timed()
        def fail(self):
            raise RuntimeError("boom")

    def test_records_timing(self):
        worker = self.Worker(MetricsCollector())
        assert worker.work(21) == 42
        assert worker._metrics.get_operation_stats("work")['count'] == 1

    def test_default_name_and_failures(self):
        worker = self.Worker(MetricsCollector())
        with pytest.raises(RuntimeError):
            worker.fail()
        assert worker._metrics.get_operation_stats("fail")['count'] == 1

    def test_without_collector(self):
        assert self.Worker(None).work(1) == 2


class TestReasoningTrace:

    def test_log_and_render(self):
        trace = ReasoningTrace()
        trace.section("Activation")
        trace.log("Seed 'cat' activated")
        assert trace.lines() == ["--- Activation ---", "Seed 'cat' activated"]
        assert str(trace) == "--- Activation ---\nSeed 'cat' activated"
        assert len(trace) == 2

    def test_bounded(self):
        trace = ReasoningTrace(max_entries=2)
        for i in range(5):
            trace.log(str(i))
        assert trace.lines() == ['3', '4']

    def test_clear(self):
        trace = ReasoningTrace()
        trace.log("x")
        trace.clear()
        assert trace.render() == ''
