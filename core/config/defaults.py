# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for check timeouts, report output, serving
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for validation runs.
These can be overridden via environment variables or CLI flags.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HealthDefaults:
    """
    Defaults for health check registration and reporting.

    Environment:
        HEALTH_DEFAULT_TIMEOUT: Per-check timeout when none is given (seconds)
        HEALTH_REPORT_PATH: Where the launch gate writes the JSON report
        LOG_LEVEL: Root log level
        LOG_FORMAT: "json" for structured output
        HOST, PORT: Bind address for `launch-gate --serve`
    """
    default_timeout_seconds: float = 10.0
    report_path: str = "health-report.json"
    log_level: str = "INFO"
    json_logs: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "HealthDefaults":
        """Create from environment variables."""
        return cls(
            default_timeout_seconds=float(os.getenv("HEALTH_DEFAULT_TIMEOUT", 10.0)),
            report_path=os.getenv("HEALTH_REPORT_PATH", "health-report.json"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("LOG_FORMAT", "").lower() == "json",
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )


# Cached instance
_defaults: Optional[HealthDefaults] = None


def get_defaults() -> HealthDefaults:
    """Get the defaults, reading the environment on first use."""
    global _defaults
    if _defaults is None:
        _defaults = HealthDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Drop the cached defaults so the environment is read again."""
    global _defaults
    _defaults = None


__all__ = [
    "HealthDefaults",
    "get_defaults",
    "reset_defaults",
]
