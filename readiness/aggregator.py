# ============================================================================
# VERDICT AGGREGATOR
# ============================================================================
# STATUS: Engine - Result aggregation
# PURPOSE: Reduce per-check results to one readiness verdict
# CREATED: 19 OCT 2026
# ============================================================================
"""
Verdict Aggregator

Pure reduction from CheckResults to (overall, critical_failures, warnings).

Rules:
- Non-passing CRITICAL checks are critical failures
- Non-passing WARNING checks are warnings
- INFO checks never affect the verdict
- FAILED if any critical failure, else DEGRADED if any warning,
  else HEALTHY

Input order is preserved in both partitions.
"""

from typing import Iterable, List, NamedTuple, Sequence

from readiness.core import CheckResult, OverallStatus, Severity


class Verdict(NamedTuple):
    """Aggregated outcome of a run, before it is stamped into a report."""
    overall: OverallStatus
    critical_failures: List[CheckResult]
    warnings: List[CheckResult]


def derive_overall(
    critical_failures: Sequence[CheckResult],
    warnings: Sequence[CheckResult],
) -> OverallStatus:
    """Apply the three-tier verdict rule."""
    if critical_failures:
        return OverallStatus.FAILED
    if warnings:
        return OverallStatus.DEGRADED
    return OverallStatus.HEALTHY


def aggregate(results: Iterable[CheckResult]) -> Verdict:
    """
    Partition non-passing results by severity and derive the verdict.

    Args:
        results: Check results, in registration order

    Returns:
        Verdict(overall, critical_failures, warnings)
    """
    critical_failures: List[CheckResult] = []
    warnings: List[CheckResult] = []

    for result in results:
        if result.passed:
            continue
        if result.severity is Severity.CRITICAL:
            critical_failures.append(result)
        elif result.severity is Severity.WARNING:
            warnings.append(result)

    return Verdict(
        overall=derive_overall(critical_failures, warnings),
        critical_failures=critical_failures,
        warnings=warnings,
    )


__all__ = [
    "Verdict",
    "aggregate",
    "derive_overall",
]
