#!/usr/bin/env python3
# ============================================================================
# LAUNCH GATE
# ============================================================================
# STATUS: Tool - Pre-launch readiness gate
# PURPOSE: Run all checks, persist the report, exit non-zero on critical failure
# CREATED: 19 OCT 2026
# ============================================================================
"""
Launch Gate

Runs every check in a registry, writes the JSON report, prints a summary
and exits with a status that a deploy script can act on:

    0 - HEALTHY or DEGRADED (degraded is logged as a warning)
    1 - FAILED: at least one CRITICAL check did not pass
    2 - Setup error: the registry could not be loaded or is misconfigured

The registry is named as "module:attribute". The attribute is either a
CheckRegistry or a zero-argument callable returning one.

Usage:
    # Run the application's checks, report to the default path
    python -m readiness.gate myapp.health:build_registry

    # Custom report path, JSON on stdout
    python -m readiness.gate myapp.health:registry --output out/health.json --json

    # Serve the same checks over HTTP (/livez, /health)
    python -m readiness.gate myapp.health:registry --serve --port 8080
"""

import argparse
import importlib
import sys
from typing import List, Optional

from core.config import get_defaults
from core.logging import configure_logging, get_logger, ComponentType
from readiness.app import serve
from readiness.core import OverallStatus
from readiness.executor import run_validation
from readiness.registry import CheckRegistry, RegistryError
from readiness.report import HealthReport, render_summary, write_report

logger = get_logger(__name__, ComponentType.GATE)

EXIT_OK = 0
EXIT_BLOCKED = 1
EXIT_SETUP_ERROR = 2


def exit_code_for(report: HealthReport) -> int:
    """Map a report to the launch gate exit code."""
    if report.critical_failures:
        return EXIT_BLOCKED
    return EXIT_OK


def load_registry(target: str) -> CheckRegistry:
    """
    Resolve "module:attribute" to a CheckRegistry.

    Raises:
        RegistryError: If the target cannot be imported, its factory
            raises, or it does not resolve to a CheckRegistry
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise RegistryError(f"Expected 'module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise RegistryError(f"Cannot import {module_name!r}: {e!r}") from e

    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        raise RegistryError(f"{module_name!r} has no attribute {attr!r}") from e

    if callable(obj) and not isinstance(obj, CheckRegistry):
        try:
            obj = obj()
        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"{target!r} failed to build a registry: {e!r}") from e

    if not isinstance(obj, CheckRegistry):
        raise RegistryError(
            f"{target!r} resolved to {type(obj).__name__}, expected CheckRegistry"
        )
    return obj


def build_parser() -> argparse.ArgumentParser:
    defaults = get_defaults()
    parser = argparse.ArgumentParser(
        prog="launch-gate",
        description="Run pre-launch health checks and gate on critical failures.",
    )
    parser.add_argument(
        "registry",
        help="Check registry as 'module:attribute' (registry or factory)",
    )
    parser.add_argument(
        "--output", "-o",
        default=defaults.report_path,
        help=f"Report path (default: {defaults.report_path})",
    )
    parser.add_argument(
        "--no-write",
        action="store_true",
        help="Do not write the report file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON report instead of the text summary",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve /livez and /health over HTTP instead of running once",
    )
    parser.add_argument(
        "--host",
        default=defaults.host,
        help=f"Bind host with --serve (default: {defaults.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=defaults.port,
        help=f"Bind port with --serve (default: {defaults.port})",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        help=f"Log level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=defaults.json_logs,
        help="Emit structured JSON logs",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the gate and return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, json_output=args.json_logs)

    try:
        registry = load_registry(args.registry)
    except RegistryError as e:
        logger.error(f"Cannot load check registry: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    if args.serve:
        serve(registry, host=args.host, port=args.port)
        return EXIT_OK

    logger.info(f"Running {len(registry)} health checks from {args.registry}")
    report = run_validation(registry)

    if not args.no_write:
        write_report(report, args.output)

    if args.json:
        print(report.to_json())
    else:
        print(render_summary(report))

    if report.overall is OverallStatus.DEGRADED:
        logger.warning(
            "Launch allowed with warnings: "
            + ", ".join(r.id for r in report.warnings)
        )
    elif report.overall is OverallStatus.FAILED:
        logger.error(
            "Launch blocked by critical failures: "
            + ", ".join(r.id for r in report.critical_failures)
        )

    return exit_code_for(report)


if __name__ == "__main__":
    sys.exit(main())
