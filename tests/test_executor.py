# ============================================================================
# HEALTH CHECK EXECUTOR TESTS
# ============================================================================
# STATUS: Tests - Concurrent validation runs
# PURPOSE: Verify ordering, concurrency bound, partial failure and scenarios
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Executor Tests

Covers:
1. allResults length and registration order, regardless of completion order
2. Checks run concurrently: wall-clock bounded by the slowest check
3. A hanging probe yields one TIMEOUT and the run ends at its deadline
4. A raising probe yields ERROR without touching other results
5. Launch scenarios (degraded, timed-out critical, empty registry)
6. Single-check execution
7. Catastrophic errors propagate

Run with:
    pytest tests/test_executor.py -v
"""

import asyncio
import random
import time

import pytest

from readiness.core import CheckStatus, OverallStatus, ProbeOutcome, Severity
from readiness.executor import HealthCheckExecutor, run_validation, validate_all
from readiness.registry import CheckRegistry


# ============================================================================
# HELPERS
# ============================================================================

def _sleeper(seconds, outcome=None):
    """Async probe that sleeps, then returns outcome."""
    async def probe():
        await asyncio.sleep(seconds)
        return outcome
    return probe


def _blocking_sleeper(seconds, outcome=None):
    """Blocking probe that sleeps, then returns outcome."""
    def probe():
        time.sleep(seconds)
        return outcome
    return probe


def _failing(message="down"):
    return lambda: ProbeOutcome.fail(message)


# ============================================================================
# ORDERING
# ============================================================================

class TestOrdering:

    def test_results_in_registration_order_not_completion_order(self):
        registry = CheckRegistry()
        # Registered slowest first so completion order is the reverse
        registry.add("slow", _sleeper(0.3, "slow"), timeout_seconds=2)
        registry.add("medium", _sleeper(0.15, "medium"), timeout_seconds=2)
        registry.add("fast", _sleeper(0.0, "fast"), timeout_seconds=2)

        report = run_validation(registry)

        assert [r.id for r in report.all_results] == ["slow", "medium", "fast"]
        assert [r.message for r in report.all_results] == ["slow", "medium", "fast"]

    def test_random_delays_keep_registration_order(self):
        rng = random.Random(7)
        registry = CheckRegistry()
        ids = [f"check-{i:02d}" for i in range(12)]
        for check_id in ids:
            registry.add(check_id, _sleeper(rng.uniform(0, 0.1)), timeout_seconds=2)

        report = run_validation(registry)

        assert len(report.all_results) == len(ids)
        assert [r.id for r in report.all_results] == ids

    def test_same_outcomes_same_serialized_ordering(self):
        def build():
            registry = CheckRegistry()
            registry.add("b", _sleeper(0.05), timeout_seconds=1)
            registry.add("a", _failing("a down"), severity=Severity.WARNING, timeout_seconds=1)
            registry.add("c", _sleeper(0.0), severity=Severity.INFO, timeout_seconds=1)
            return registry

        first = run_validation(build()).to_dict()
        second = run_validation(build()).to_dict()

        for key in ("allResults", "criticalFailures", "warnings"):
            assert [r["id"] for r in first[key]] == [r["id"] for r in second[key]]
        assert first["overall"] == second["overall"]


# ============================================================================
# CONCURRENCY
# ============================================================================

class TestConcurrency:

    def test_async_checks_run_concurrently(self):
        registry = CheckRegistry()
        for i in range(6):
            registry.add(f"c{i}", _sleeper(0.3), timeout_seconds=2)

        start = time.monotonic()
        report = run_validation(registry)
        elapsed = time.monotonic() - start

        assert all(r.status is CheckStatus.PASS for r in report.all_results)
        assert elapsed < 1.0

    def test_blocking_checks_run_concurrently(self):
        registry = CheckRegistry()
        for i in range(6):
            registry.add(f"c{i}", _blocking_sleeper(0.3), timeout_seconds=2)

        start = time.monotonic()
        report = run_validation(registry)
        elapsed = time.monotonic() - start

        assert all(r.status is CheckStatus.PASS for r in report.all_results)
        assert elapsed < 1.0

    def test_total_bounded_by_slowest_timeout_not_sum(self):
        registry = CheckRegistry()
        for i in range(4):
            registry.add(f"hang{i}", _blocking_sleeper(3), timeout_seconds=0.3)

        start = time.monotonic()
        report = run_validation(registry)
        elapsed = time.monotonic() - start

        assert all(r.status is CheckStatus.TIMEOUT for r in report.all_results)
        assert elapsed < 1.0


# ============================================================================
# PARTIAL FAILURE
# ============================================================================

class TestPartialFailure:

    def test_hanging_probe_single_timeout(self):
        registry = CheckRegistry()
        registry.add("ok", lambda: "fine", timeout_seconds=1)
        registry.add("hang", _sleeper(10), timeout_seconds=0.2)

        start = time.monotonic()
        report = run_validation(registry)
        elapsed = time.monotonic() - start

        hang_results = [r for r in report.all_results if r.id == "hang"]
        assert len(hang_results) == 1
        assert hang_results[0].status is CheckStatus.TIMEOUT
        assert report.all_results[0].status is CheckStatus.PASS
        assert elapsed < 0.2 + 0.5

    def test_blocking_async_probe_does_not_stall_run(self):
        async def blocking():
            time.sleep(2)
            return "late"

        registry = CheckRegistry()
        registry.add("ok", lambda: "fine", timeout_seconds=1)
        registry.add("blocking", blocking, timeout_seconds=0.3)

        start = time.monotonic()
        report = run_validation(registry)
        elapsed = time.monotonic() - start

        by_id = {r.id: r for r in report.all_results}
        assert by_id["ok"].status is CheckStatus.PASS
        assert by_id["blocking"].status is CheckStatus.TIMEOUT
        assert report.overall is OverallStatus.FAILED
        assert elapsed < 1.5

    def test_raising_probe_isolated(self):
        def boom():
            raise RuntimeError("model not loaded")

        registry = CheckRegistry()
        registry.add("before", lambda: "a", timeout_seconds=1)
        registry.add("boom", boom, timeout_seconds=1)
        registry.add("after", lambda: "b", timeout_seconds=1)

        report = run_validation(registry)
        by_id = {r.id: r for r in report.all_results}

        assert by_id["boom"].status is CheckStatus.ERROR
        assert by_id["boom"].message
        assert by_id["before"].status is CheckStatus.PASS
        assert by_id["before"].message == "a"
        assert by_id["after"].status is CheckStatus.PASS
        assert by_id["after"].message == "b"
        assert report.overall is OverallStatus.FAILED
        assert [r.id for r in report.critical_failures] == ["boom"]

    def test_memory_error_propagates(self):
        async def oom():
            raise MemoryError()

        registry = CheckRegistry()
        registry.add("ok", lambda: "fine", timeout_seconds=1)
        registry.add("oom", oom, timeout_seconds=1)

        with pytest.raises(MemoryError):
            run_validation(registry)


# ============================================================================
# SCENARIOS
# ============================================================================

class TestScenarios:

    def test_degraded_launch(self):
        registry = CheckRegistry()
        registry.add("db", lambda: "connected", severity=Severity.CRITICAL, timeout_seconds=1)
        registry.add("cache", _failing("cache down"), severity=Severity.WARNING, timeout_seconds=1)
        registry.add("telemetry", _failing("no collector"), severity=Severity.INFO, timeout_seconds=1)

        report = run_validation(registry)

        assert report.overall is OverallStatus.DEGRADED
        assert report.overall.value == "DEGRADED"
        assert list(report.critical_failures) == []
        assert [r.id for r in report.warnings] == ["cache"]
        assert [r.id for r in report.all_results] == ["db", "cache", "telemetry"]

    def test_critical_timeout_fails_in_one_second(self):
        registry = CheckRegistry()
        registry.add("db", _sleeper(2, "connected"), severity=Severity.CRITICAL, timeout_seconds=1)

        start = time.monotonic()
        report = run_validation(registry)
        elapsed = time.monotonic() - start

        assert 0.9 <= elapsed < 1.5
        assert report.all_results[0].status is CheckStatus.TIMEOUT
        assert report.all_results[0].message == "check exceeded 1s"
        assert report.overall is OverallStatus.FAILED
        assert [r.id for r in report.critical_failures] == ["db"]

    def test_empty_registry(self):
        start = time.monotonic()
        report = run_validation(CheckRegistry())
        elapsed = time.monotonic() - start

        assert report.overall is OverallStatus.HEALTHY
        assert report.all_results == ()
        assert report.critical_failures == ()
        assert report.warnings == ()
        assert elapsed < 0.5

    def test_all_pass_healthy(self):
        registry = CheckRegistry()
        registry.add("db", lambda: "ok", timeout_seconds=1)
        registry.add("cache", lambda: "ok", severity=Severity.WARNING, timeout_seconds=1)

        report = run_validation(registry)
        assert report.overall is OverallStatus.HEALTHY


# ============================================================================
# ENTRY POINTS
# ============================================================================

class TestEntryPoints:

    def test_validate_all_coroutine(self):
        registry = CheckRegistry()
        registry.add("db", lambda: "ok", timeout_seconds=1)

        report = asyncio.run(validate_all(registry))
        assert report.overall is OverallStatus.HEALTHY
        assert report.generated_at is not None

    def test_execute_single(self):
        registry = CheckRegistry()
        registry.add("db", lambda: "ok", timeout_seconds=1)
        registry.add("cache", _failing("down"), severity=Severity.WARNING, timeout_seconds=1)

        executor = HealthCheckExecutor(registry)
        result = asyncio.run(executor.execute_single("cache"))

        assert result.id == "cache"
        assert result.status is CheckStatus.FAIL

    def test_execute_single_unknown(self):
        executor = HealthCheckExecutor(CheckRegistry())
        assert asyncio.run(executor.execute_single("missing")) is None

    def test_registry_reusable_across_runs(self):
        calls = []

        def probe():
            calls.append(1)
            return f"call {len(calls)}"

        registry = CheckRegistry()
        registry.add("counter", probe, timeout_seconds=1)

        first = run_validation(registry)
        second = run_validation(registry)

        assert first.all_results[0].message == "call 1"
        assert second.all_results[0].message == "call 2"
