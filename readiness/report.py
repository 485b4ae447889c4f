# ============================================================================
# HEALTH REPORT
# ============================================================================
# STATUS: Engine - Report assembly and output
# PURPOSE: Immutable run report, JSON document and operator summary
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Report

HealthReport is the immutable artifact of one validation run. The JSON
document produced by to_dict()/to_json() uses stable field names so that
reports from different runs can be diffed:

    {
        "overall": "DEGRADED",
        "criticalFailures": [...],
        "warnings": [...],
        "allResults": [...],
        "generatedAt": "2026-10-19T08:00:00Z"
    }

build_report() does no I/O. write_report() and render_summary() are the
sinks used by the launch gate.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.logging import get_logger, ComponentType
from readiness.aggregator import derive_overall
from readiness.core import CheckResult, OverallStatus, Severity

logger = get_logger(__name__, ComponentType.REPORT)


class HealthReport(BaseModel):
    """
    Aggregated, immutable outcome of one validation run.

    Construction fails (pydantic ValidationError) if overall disagrees
    with critical_failures/warnings.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    overall: OverallStatus
    critical_failures: Tuple[CheckResult, ...] = Field(
        default=(), alias="criticalFailures"
    )
    warnings: Tuple[CheckResult, ...] = ()
    all_results: Tuple[CheckResult, ...] = Field(default=(), alias="allResults")
    generated_at: datetime = Field(alias="generatedAt")

    @model_validator(mode="after")
    def _check_verdict(self) -> "HealthReport":
        for result in self.critical_failures:
            if result.passed or result.severity is not Severity.CRITICAL:
                raise ValueError(
                    f"criticalFailures may only hold non-passing CRITICAL results: {result.id}"
                )
        for result in self.warnings:
            if result.passed or result.severity is not Severity.WARNING:
                raise ValueError(
                    f"warnings may only hold non-passing WARNING results: {result.id}"
                )

        expected = derive_overall(self.critical_failures, self.warnings)
        if self.overall is not expected:
            raise ValueError(
                f"overall={self.overall.value} inconsistent with results "
                f"(expected {expected.value})"
            )
        return self

    @property
    def is_launch_blocked(self) -> bool:
        """True if any critical check failed."""
        return bool(self.critical_failures)

    def passed_results(self) -> Tuple[CheckResult, ...]:
        return tuple(r for r in self.all_results if r.passed)

    def failed_results(self) -> Tuple[CheckResult, ...]:
        return tuple(r for r in self.all_results if not r.passed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "overall": self.overall.value,
            "criticalFailures": [r.to_dict() for r in self.critical_failures],
            "warnings": [r.to_dict() for r in self.warnings],
            "allResults": [r.to_dict() for r in self.all_results],
            "generatedAt": _isoformat(self.generated_at),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to the JSON report document."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def _isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# ============================================================================
# BUILDER
# ============================================================================

def build_report(
    overall: OverallStatus,
    critical_failures: Sequence[CheckResult],
    warnings: Sequence[CheckResult],
    all_results: Sequence[CheckResult],
    now: Optional[datetime] = None,
) -> HealthReport:
    """
    Assemble the final report and stamp generated_at.

    Args:
        overall: Verdict from aggregate()
        critical_failures: Non-passing CRITICAL results
        warnings: Non-passing WARNING results
        all_results: Every result, in registration order
        now: Timestamp override (UTC now if None)

    Returns:
        Immutable HealthReport
    """
    return HealthReport(
        overall=overall,
        critical_failures=tuple(critical_failures),
        warnings=tuple(warnings),
        all_results=tuple(all_results),
        generated_at=now or datetime.now(timezone.utc),
    )


# ============================================================================
# SINKS
# ============================================================================

def write_report(report: HealthReport, path: Union[str, Path]) -> Path:
    """
    Write the JSON report document to disk.

    Parent directories are created as needed.

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.to_json() + "\n", encoding="utf-8")
    logger.info(f"Health report written to {path}")
    return path


def render_summary(report: HealthReport) -> str:
    """
    Render a plain-text summary for operators.

    Lists counts, then critical failures, warnings and failing INFO
    checks, then a PASSED/FAILED trailer.
    """
    # Passed, warnings and failed are disjoint; failed excludes WARNING checks
    failed = [
        r for r in report.failed_results() if r.severity is not Severity.WARNING
    ]
    rule = "=" * 60
    lines = [
        rule,
        "LAUNCH READINESS REPORT",
        rule,
        f"Overall: {report.overall.value}",
        f"Generated: {_isoformat(report.generated_at)}",
        "",
        f"Passed: {len(report.passed_results())}",
        f"Warnings: {len(report.warnings)}",
        f"Failed: {len(failed)}",
    ]

    if report.critical_failures:
        lines.append("")
        lines.append("CRITICAL FAILURES:")
        for result in report.critical_failures:
            lines.append(f"  - {result.id} [{result.status.value}]: {result.message}")

    if report.warnings:
        lines.append("")
        lines.append("WARNINGS:")
        for result in report.warnings:
            lines.append(f"  - {result.id} [{result.status.value}]: {result.message}")

    informational = [
        r for r in report.all_results
        if not r.passed and r.severity is Severity.INFO
    ]
    if informational:
        lines.append("")
        lines.append("INFO:")
        for result in informational:
            lines.append(f"  - {result.id} [{result.status.value}]: {result.message}")

    lines.append("")
    lines.append(rule)
    if report.is_launch_blocked:
        lines.append("HEALTH CHECK FAILED")
    else:
        lines.append("HEALTH CHECK PASSED")

    return "\n".join(lines)


__all__ = [
    "HealthReport",
    "build_report",
    "write_report",
    "render_summary",
]
