# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# STATUS: Engine - Concurrent check execution
# PURPOSE: Fan out every registered check, fan in, aggregate, report
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Executor

Runs a whole registry as one validation run:

1. Start every probe at once (one task per check, no tiers, no staggering)
2. Wait until every check is PASS/FAIL/TIMEOUT/ERROR
3. Put results back in registration order
4. Aggregate and build the HealthReport

There is no run-wide timeout. Each check carries its own, so a run takes
about as long as its slowest check's timeout.

Every probe gets its own daemon thread, so none of them queues behind
another, even one that blocks inside `async def`. A hung probe keeps its
thread but cannot delay this run's report or show up in a later run.
"""

import asyncio
import time
import uuid
from typing import List, Optional

from core.logging import get_logger, log_checkpoint, log_context, ComponentType
from readiness.aggregator import aggregate
from readiness.core import CheckResult, CheckSpec
from readiness.registry import CheckRegistry
from readiness.report import HealthReport, build_report
from readiness.runner import ProbeRunner

logger = get_logger(__name__, ComponentType.EXECUTOR)


class HealthCheckExecutor:
    """
    Executes every check in a registry concurrently.

    Args:
        registry: Checks to run
    """

    def __init__(self, registry: CheckRegistry):
        self.registry = registry

    async def execute_all(self) -> HealthReport:
        """
        Execute all registered checks and build the report.

        Returns:
            HealthReport with results in registration order
        """
        specs = self.registry.all()
        run_id = uuid.uuid4().hex[:12]

        with log_context(run_id=run_id, operation="validate_all"):
            log_checkpoint("validation_started", {"check_count": len(specs)})
            start_time = time.monotonic()

            results = await self._execute_specs(specs)

            verdict = aggregate(results)
            report = build_report(
                verdict.overall,
                verdict.critical_failures,
                verdict.warnings,
                results,
            )

            total_duration_ms = (time.monotonic() - start_time) * 1000
            log_checkpoint("validation_completed", {
                "overall": report.overall.value,
                "critical_failures": [r.id for r in report.critical_failures],
                "warnings": [r.id for r in report.warnings],
                "total_duration_ms": round(total_duration_ms, 2),
            })
            logger.info(
                f"Validation finished: {report.overall.value} "
                f"({len(results)} checks, {total_duration_ms:.1f}ms)"
            )
            return report

    async def execute_single(self, check_id: str) -> Optional[CheckResult]:
        """Execute a single check by id, or None if it is not registered."""
        spec = self.registry.get(check_id)
        if spec is None:
            return None

        results = await self._execute_specs([spec])
        return results[0]

    async def _execute_specs(self, specs: List[CheckSpec]) -> List[CheckResult]:
        """Run specs concurrently; results come back in the given order."""
        if not specs:
            return []

        runner = ProbeRunner()

        # gather() preserves argument order regardless of completion order
        results = await asyncio.gather(*(runner.run(spec) for spec in specs))

        return list(results)


async def validate_all(registry: CheckRegistry) -> HealthReport:
    """Run every check in the registry and return the report."""
    return await HealthCheckExecutor(registry).execute_all()


def run_validation(registry: CheckRegistry) -> HealthReport:
    """
    Blocking entry point for scripts.

    Must not be called from inside a running event loop.
    """
    return asyncio.run(validate_all(registry))


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckExecutor",
    "validate_all",
    "run_validation",
]
