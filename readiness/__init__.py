# ============================================================================
# READINESS MODULE
# ============================================================================
# STATUS: Engine - Health check orchestration
# PURPOSE: Pre-launch readiness validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Readiness Module

Registry-based health check engine for pre-launch validation:
- CheckRegistry: Named check definitions, in registration order
- ProbeRunner: One probe under its own timeout
- HealthCheckExecutor / validate_all: All checks concurrently
- aggregate: Severity-driven verdict (HEALTHY / DEGRADED / FAILED)
- build_report / HealthReport: Immutable report with stable JSON fields
- gate: CLI that exits 1 when a CRITICAL check fails
- router / app: FastAPI endpoints (/livez, /health, /health/{check_id})

Usage:
    from readiness import CheckRegistry, Severity, run_validation

    registry = CheckRegistry()

    @registry.check("db", severity=Severity.CRITICAL, timeout_seconds=2)
    async def db_reachable():
        conn = await asyncpg.connect(DATABASE_URL)
        await conn.execute("SELECT 1")
        await conn.close()
        return "connected"

    report = run_validation(registry)
    print(report.overall)

Each probe runs on its own thread (coroutines on their own event loop),
so a probe opens the connections it needs instead of sharing the caller's.
"""

from readiness.core import (
    Severity,
    CheckStatus,
    OverallStatus,
    ProbeOutcome,
    CheckSpec,
    CheckResult,
)
from readiness.registry import (
    CheckRegistry,
    RegistryError,
    DuplicateCheckError,
)
from readiness.runner import ProbeRunner
from readiness.aggregator import Verdict, aggregate
from readiness.report import HealthReport, build_report, write_report, render_summary
from readiness.executor import HealthCheckExecutor, validate_all, run_validation

__all__ = [
    # Core types
    "Severity",
    "CheckStatus",
    "OverallStatus",
    "ProbeOutcome",
    "CheckSpec",
    "CheckResult",
    # Registry
    "CheckRegistry",
    "RegistryError",
    "DuplicateCheckError",
    # Execution
    "ProbeRunner",
    "HealthCheckExecutor",
    "validate_all",
    "run_validation",
    # Aggregation & reporting
    "Verdict",
    "aggregate",
    "HealthReport",
    "build_report",
    "write_report",
    "render_summary",
]
