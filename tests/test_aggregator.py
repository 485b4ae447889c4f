# ============================================================================
# VERDICT AGGREGATOR TESTS
# ============================================================================
# STATUS: Tests - Verdict derivation
# PURPOSE: Exhaustive severity x status truth table and ordering
# CREATED: 19 OCT 2026
# ============================================================================
"""
Verdict Aggregator Tests

Covers:
1. derive_overall() over every (critical, warning) combination
2. aggregate() over every status for one check of each severity
3. INFO never affects the verdict
4. Partitions preserve input order

Run with:
    pytest tests/test_aggregator.py -v
"""

import itertools

import pytest

from readiness.aggregator import Verdict, aggregate, derive_overall
from readiness.core import CheckResult, CheckStatus, OverallStatus, Severity


# ============================================================================
# HELPERS
# ============================================================================

def _result(check_id, status, severity):
    return CheckResult(id=check_id, status=status, severity=severity)


# ============================================================================
# DERIVE OVERALL
# ============================================================================

class TestDeriveOverall:

    @pytest.mark.parametrize(
        "has_critical, has_warning, expected",
        [
            (False, False, OverallStatus.HEALTHY),
            (False, True, OverallStatus.DEGRADED),
            (True, False, OverallStatus.FAILED),
            (True, True, OverallStatus.FAILED),
        ],
    )
    def test_truth_table(self, has_critical, has_warning, expected):
        critical = [_result("c", CheckStatus.FAIL, Severity.CRITICAL)] if has_critical else []
        warnings = [_result("w", CheckStatus.FAIL, Severity.WARNING)] if has_warning else []
        assert derive_overall(critical, warnings) is expected


# ============================================================================
# AGGREGATE
# ============================================================================

ALL_STATUSES = list(CheckStatus)


class TestAggregate:

    @pytest.mark.parametrize(
        "critical_status, warning_status, info_status",
        list(itertools.product(ALL_STATUSES, repeat=3)),
    )
    def test_exhaustive(self, critical_status, warning_status, info_status):
        results = [
            _result("critical", critical_status, Severity.CRITICAL),
            _result("warning", warning_status, Severity.WARNING),
            _result("info", info_status, Severity.INFO),
        ]

        verdict = aggregate(results)

        critical_failed = critical_status is not CheckStatus.PASS
        warning_failed = warning_status is not CheckStatus.PASS

        assert [r.id for r in verdict.critical_failures] == (
            ["critical"] if critical_failed else []
        )
        assert [r.id for r in verdict.warnings] == (
            ["warning"] if warning_failed else []
        )

        if critical_failed:
            assert verdict.overall is OverallStatus.FAILED
        elif warning_failed:
            assert verdict.overall is OverallStatus.DEGRADED
        else:
            assert verdict.overall is OverallStatus.HEALTHY

    def test_empty_results_healthy(self):
        verdict = aggregate([])
        assert verdict == Verdict(OverallStatus.HEALTHY, [], [])

    def test_info_failures_only_is_healthy(self):
        results = [
            _result("telemetry", CheckStatus.FAIL, Severity.INFO),
            _result("analytics", CheckStatus.ERROR, Severity.INFO),
            _result("metrics", CheckStatus.TIMEOUT, Severity.INFO),
        ]
        verdict = aggregate(results)
        assert verdict.overall is OverallStatus.HEALTHY
        assert verdict.critical_failures == []
        assert verdict.warnings == []

    def test_order_preserved_within_partitions(self):
        results = [
            _result("w1", CheckStatus.FAIL, Severity.WARNING),
            _result("c1", CheckStatus.TIMEOUT, Severity.CRITICAL),
            _result("ok", CheckStatus.PASS, Severity.CRITICAL),
            _result("w2", CheckStatus.ERROR, Severity.WARNING),
            _result("c2", CheckStatus.FAIL, Severity.CRITICAL),
            _result("w3", CheckStatus.TIMEOUT, Severity.WARNING),
        ]
        verdict = aggregate(results)
        assert [r.id for r in verdict.critical_failures] == ["c1", "c2"]
        assert [r.id for r in verdict.warnings] == ["w1", "w2", "w3"]

    def test_accepts_iterator(self):
        results = iter([_result("c", CheckStatus.FAIL, Severity.CRITICAL)])
        assert aggregate(results).overall is OverallStatus.FAILED

    def test_does_not_mutate_input(self):
        results = [_result("c", CheckStatus.FAIL, Severity.CRITICAL)]
        snapshot = list(results)
        aggregate(results)
        assert results == snapshot
