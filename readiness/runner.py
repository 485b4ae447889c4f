# ============================================================================
# PROBE RUNNER
# ============================================================================
# STATUS: Engine - Single probe execution
# PURPOSE: Run one probe under its deadline and capture the outcome
# CREATED: 19 OCT 2026
# ============================================================================
"""
Probe Runner

Executes a single CheckSpec, racing its probe against the configured timeout,
and always returns exactly one CheckResult:

    probe returns success       -> PASS
    probe returns failure       -> FAIL
    probe raises                -> ERROR   (message = exception text)
    deadline elapses first      -> TIMEOUT (message = "check exceeded <t>")

Every probe runs on its own daemon thread; coroutine probes get a private
event loop there. A probe that blocks, even inside `async def`, therefore
cannot stall the caller's loop, the deadline timer or other checks.
Coroutine probes must not rely on objects bound to the caller's loop.

A timed-out probe is abandoned: nothing waits for it and whatever it
returns later is dropped. An outcome measured at or past the deadline is
reported as TIMEOUT even if it arrived before the timer fired.

MemoryError and BaseExceptions that are not Exceptions (KeyboardInterrupt,
SystemExit) are not turned into results. They propagate.
"""

import asyncio
import contextvars
import inspect
import threading
import time
from typing import Any, Dict, Optional

from core.logging import get_logger, log_context, ComponentType
from readiness.core import (
    CheckResult,
    CheckSpec,
    CheckStatus,
    ProbeOutcome,
    describe_timeout,
)

logger = get_logger(__name__, ComponentType.RUNNER)


async def _await(awaitable: Any) -> Any:
    return await awaitable


class ProbeRunner:
    """Runs probes with per-check timeouts. Holds no state between runs."""

    async def run(self, spec: CheckSpec) -> CheckResult:
        """
        Execute one check.

        Args:
            spec: Check definition

        Returns:
            CheckResult for this spec (never raises for probe failures)
        """
        with log_context(check_id=spec.id):
            start_time = time.monotonic()
            task = self._run_in_thread(spec)

            # Only the deadline yields TIMEOUT; a probe's own TimeoutError is ERROR
            done, _ = await asyncio.wait({task}, timeout=spec.timeout_seconds)
            duration_ms = (time.monotonic() - start_time) * 1000
            overdue = duration_ms >= spec.timeout_seconds * 1000

            if not done:
                task.cancel()
                return self._timed_out(spec, duration_ms)

            try:
                outcome = task.result()

            except MemoryError:
                raise

            except Exception as e:
                if overdue:
                    return self._timed_out(spec, duration_ms)
                logger.error(f"Health check {spec.id} raised: {e!r}")
                result = CheckResult(
                    id=spec.id,
                    status=CheckStatus.ERROR,
                    message=str(e) or type(e).__name__,
                    duration_ms=duration_ms,
                    severity=spec.severity,
                    details={"exception_type": type(e).__name__},
                )

            else:
                if overdue:
                    return self._timed_out(spec, duration_ms)
                result = self._from_outcome(spec, outcome, duration_ms)

            logger.debug(
                f"Health check {spec.id}: {result.status.value} "
                f"({result.duration_ms:.1f}ms)"
            )
            return result

    @staticmethod
    def _timed_out(spec: CheckSpec, duration_ms: float) -> CheckResult:
        limit = describe_timeout(spec.timeout_seconds)
        logger.warning(f"Health check {spec.id} timed out after {limit}")
        return CheckResult(
            id=spec.id,
            status=CheckStatus.TIMEOUT,
            message=f"check exceeded {limit}",
            duration_ms=duration_ms,
            severity=spec.severity,
        )

    @staticmethod
    def _call_probe(spec: CheckSpec) -> Any:
        """Call the probe; drive any awaitable it returns on a private loop."""
        value = spec.probe()
        if inspect.isawaitable(value):
            value = asyncio.run(_await(value))
        return value

    @classmethod
    def _run_in_thread(cls, spec: CheckSpec) -> "asyncio.Future[Any]":
        """
        Start a probe on its own daemon thread.

        The thread runs in a copy of the caller's context so the probe's
        log records carry its check_id. Interpreter exit does not wait
        for it.
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        context = contextvars.copy_context()

        def settle(value: Any, error: Optional[BaseException]) -> None:
            if future.done():
                # Abandoned after timeout; late outcome is discarded
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(value)

        def target() -> None:
            try:
                value, error = context.run(cls._call_probe, spec), None
            except BaseException as e:
                value, error = None, e
            try:
                loop.call_soon_threadsafe(settle, value, error)
            except RuntimeError:
                # Event loop already closed; the run this belonged to is over
                pass

        thread = threading.Thread(
            target=target,
            name=f"health-probe-{spec.id}",
            daemon=True,
        )
        thread.start()
        return future

    @staticmethod
    def _from_outcome(
        spec: CheckSpec,
        outcome: Any,
        duration_ms: float,
    ) -> CheckResult:
        """Normalize whatever the probe returned into a CheckResult."""
        details: Dict[str, Any] = {}

        if outcome is None:
            status, message = CheckStatus.PASS, ""
        elif isinstance(outcome, str):
            status, message = CheckStatus.PASS, outcome
        elif isinstance(outcome, ProbeOutcome):
            status = CheckStatus.PASS if outcome.passed else CheckStatus.FAIL
            message = outcome.message
            details = dict(outcome.details)
        else:
            status = CheckStatus.ERROR
            message = f"Unsupported probe return type: {type(outcome).__name__}"
            details = {"return_type": type(outcome).__name__}

        if status is CheckStatus.FAIL:
            logger.info(f"Health check {spec.id} failed: {message}")

        return CheckResult(
            id=spec.id,
            status=status,
            message=message,
            duration_ms=duration_ms,
            severity=spec.severity,
            details=details,
        )


__all__ = [
    "ProbeRunner",
]
