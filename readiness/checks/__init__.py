# ============================================================================
# PROBE FACTORIES
# ============================================================================
# STATUS: Probes - Generic probe implementations
# PURPOSE: Reusable probes applications register alongside their own
# ============================================================================
"""
Probe Factories

Each factory returns a probe callable for CheckRegistry.add():

Startup (local, blocking):
- process_probe: Process alive
- env_probe: Required environment variables present
- paths_probe: Required files/directories present
- memory_probe: Memory usage under a threshold

Network (async):
- http_probe: HTTP endpoint status
- tcp_probe: TCP port reachable
"""

from readiness.checks.startup import process_probe, env_probe, paths_probe, memory_probe
from readiness.checks.network import (
    NOT_FOUND_MARKERS,
    SECURITY_HEADERS,
    http_probe,
    tcp_probe,
)

__all__ = [
    # Startup
    "process_probe",
    "env_probe",
    "paths_probe",
    "memory_probe",
    # Network
    "SECURITY_HEADERS",
    "NOT_FOUND_MARKERS",
    "http_probe",
    "tcp_probe",
]
