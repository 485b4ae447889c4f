# ============================================================================
# STARTUP PROBES
# ============================================================================
# STATUS: Probes - Process, configuration and filesystem probes
# PURPOSE: Generic local probes for registration by applications
# CREATED: 19 OCT 2026
# ============================================================================
"""
Startup Probes

Factories returning probes for local, dependency-free checks:
- process_probe: Always passes if the check runs (proves process is alive)
- env_probe: Required environment variables present
- paths_probe: Required files and directories present
- memory_probe: System memory usage under a threshold (psutil)

Example:
    registry.add("config", env_probe(["DATABASE_URL"]), severity="CRITICAL")
"""

import os
import platform
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

import psutil

from readiness.core import ProbeOutcome


def process_probe() -> Callable[[], ProbeOutcome]:
    """Probe that always passes and reports interpreter details."""

    def probe() -> ProbeOutcome:
        return ProbeOutcome.ok(
            "Process running",
            python_version=sys.version.split()[0],
            platform=platform.platform(),
            pid=os.getpid(),
        )

    return probe


def env_probe(
    names: Iterable[str],
    environ: Optional[Dict[str, str]] = None,
) -> Callable[[], ProbeOutcome]:
    """
    Probe that fails when any of the named variables is missing or empty.

    Does NOT check if values are valid (that's for other checks).

    Args:
        names: Required variable names
        environ: Mapping to read (os.environ at probe time if None)
    """
    required = list(names)

    def probe() -> ProbeOutcome:
        env = os.environ if environ is None else environ
        missing: List[str] = []
        present: List[str] = []

        for name in required:
            if env.get(name):
                present.append(name)
            else:
                missing.append(name)

        if missing:
            return ProbeOutcome.fail(
                f"Missing required config: {', '.join(missing)}",
                missing=missing,
                present=present,
            )
        return ProbeOutcome.ok("All required config present", present=present)

    return probe


def paths_probe(
    paths: Iterable[Union[str, Path]],
    base_dir: Optional[Union[str, Path]] = None,
) -> Callable[[], ProbeOutcome]:
    """
    Probe that fails when any of the given paths does not exist.

    Args:
        paths: Files or directories, relative to base_dir if not absolute
        base_dir: Base for relative paths (working directory at probe time if None)
    """
    required = [Path(p) for p in paths]

    def probe() -> ProbeOutcome:
        base = Path(base_dir) if base_dir is not None else Path.cwd()
        missing = [
            str(p) for p in required
            if not (p if p.is_absolute() else base / p).exists()
        ]
        if missing:
            return ProbeOutcome.fail(
                f"Missing required paths: {', '.join(missing)}",
                missing=missing,
            )
        return ProbeOutcome.ok(f"{len(required)} required paths present")

    return probe


def memory_probe(max_percent: float = 90.0) -> Callable[[], ProbeOutcome]:
    """
    Probe that fails when system memory usage exceeds max_percent.

    Uses psutil.virtual_memory(); an error reading it yields an ERROR result.
    """

    def probe() -> ProbeOutcome:
        memory = psutil.virtual_memory()
        percent = round(memory.percent, 1)
        details = {
            "used_mb": memory.used // (1024 * 1024),
            "total_mb": memory.total // (1024 * 1024),
            "percentage": percent,
        }

        if percent > max_percent:
            return ProbeOutcome.fail(
                f"Memory usage {percent}% exceeds {max_percent}%",
                **details,
            )
        return ProbeOutcome.ok(f"Memory usage {percent}%", **details)

    return probe


__all__ = [
    "process_probe",
    "env_probe",
    "paths_probe",
    "memory_probe",
]
