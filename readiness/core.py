# ============================================================================
# READINESS CORE TYPES
# ============================================================================
# STATUS: Engine - Check definitions and result types
# PURPOSE: Severity/status enums, probe outcomes, check specs and results
# CREATED: 19 OCT 2026
# ============================================================================
"""
Readiness Core Types

Defines the registration contract and result types for health checks.

Severity (what a non-passing check does to the verdict):
- CRITICAL: blocks launch
- WARNING: degrades but does not block
- INFO: recorded only

Check status (one per check per run):
- PASS: probe completed and reported success
- FAIL: probe completed and reported failure
- TIMEOUT: probe did not finish within its timeout
- ERROR: probe raised

Overall status (one per run):
- HEALTHY: no critical failures, no warnings
- DEGRADED: no critical failures, at least one warning
- FAILED: at least one critical failure
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Union

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """How much a non-passing check matters."""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


class CheckStatus(str, Enum):
    """Terminal state of one probe execution."""
    PASS = "PASS"
    FAIL = "FAIL"
    TIMEOUT = "TIMEOUT"
    ERROR = "ERROR"

    def is_passing(self) -> bool:
        """Check if this counts as a pass."""
        return self is CheckStatus.PASS


class OverallStatus(str, Enum):
    """Readiness verdict for a whole validation run."""
    HEALTHY = "HEALTHY"
    DEGRADED = "DEGRADED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ProbeOutcome:
    """
    What a probe reports when it completes.

    Probes may also return a plain string (success message) or None
    (success, no message); the runner normalizes both to ProbeOutcome.
    """
    passed: bool
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str = "", **details) -> "ProbeOutcome":
        """Create passing outcome."""
        return cls(passed=True, message=message, details=details)

    @classmethod
    def fail(cls, message: str, **details) -> "ProbeOutcome":
        """Create failing outcome."""
        return cls(passed=False, message=message, details=details)


ProbeReturn = Union[ProbeOutcome, str, None]
Probe = Callable[[], Union[ProbeReturn, Awaitable[ProbeReturn]]]


@dataclass(frozen=True)
class CheckSpec:
    """
    Immutable definition of one health check.

    Attributes:
        id: Unique identifier within a registry
        severity: Effect of a non-passing result on the verdict
        timeout_seconds: Deadline for a single probe execution
        probe: Zero-argument callable, sync or async
        description: Optional human-readable summary

    Raises:
        ValueError: Empty id or non-positive timeout
        TypeError: Probe is not callable
    """
    id: str
    severity: Severity
    timeout_seconds: float
    probe: Probe = field(repr=False, compare=False)
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Check id must be a non-empty string")

        # Accept strings like "CRITICAL" and timedeltas; store normalized values
        object.__setattr__(self, "severity", Severity(self.severity))
        timeout = self.timeout_seconds
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        timeout = float(timeout)
        if timeout <= 0:
            raise ValueError(
                f"Check {self.id!r} timeout must be positive, got {timeout}"
            )
        object.__setattr__(self, "timeout_seconds", timeout)

        if not callable(self.probe):
            raise TypeError(f"Check {self.id!r} probe must be callable")


class CheckResult(BaseModel):
    """
    Immutable outcome of running one CheckSpec once.

    Serializes with the stable report field names (durationMeasured).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    status: CheckStatus
    message: str = ""
    duration_ms: float = Field(default=0.0, ge=0.0, alias="durationMeasured")
    severity: Severity
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status.is_passing()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "id": self.id,
            "status": self.status.value,
            "message": self.message,
            "durationMeasured": round(self.duration_ms, 2),
            "severity": self.severity.value,
            "details": self.details,
        }


def describe_timeout(timeout_seconds: float) -> str:
    """Render a timeout for messages ("1s", "0.25s")."""
    return f"{timeout_seconds:g}s"


__all__ = [
    "Severity",
    "CheckStatus",
    "OverallStatus",
    "ProbeOutcome",
    "Probe",
    "ProbeReturn",
    "CheckSpec",
    "CheckResult",
    "describe_timeout",
]
