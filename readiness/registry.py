# ============================================================================
# CHECK REGISTRY
# ============================================================================
# STATUS: Engine - Health check registration
# PURPOSE: Hold named check definitions in registration order
# CREATED: 19 OCT 2026
# ============================================================================
"""
Check Registry

Holds the CheckSpecs for one process. Registration order is significant:
it is the order of allResults in every report built from this registry,
whatever order the probes actually finish in.

There is no global registry. Build one at startup and pass it to
validate_all(); nothing removes or replaces a check once registered.

Usage:
    registry = CheckRegistry()

    # Direct registration
    registry.add("db", ping_database, severity=Severity.CRITICAL, timeout_seconds=2)

    # Decorator registration
    @registry.check("cache", severity=Severity.WARNING)
    async def cache_reachable():
        ...

    specs = registry.all()
"""

from typing import Callable, Dict, Iterator, List, Optional, Union
from datetime import timedelta

from core.config import get_defaults
from core.logging import get_logger, ComponentType
from readiness.core import CheckSpec, Probe, Severity

logger = get_logger(__name__, ComponentType.REGISTRY)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class RegistryError(Exception):
    """Base exception for registry misconfiguration."""
    pass


class DuplicateCheckError(RegistryError):
    """Raised when a check id is already registered."""
    def __init__(self, check_id: str):
        self.check_id = check_id
        super().__init__(f"Health check already registered: {check_id}")


# ============================================================================
# REGISTRY
# ============================================================================

class CheckRegistry:
    """
    Ordered collection of CheckSpecs keyed by id.

    Dicts preserve insertion order, so iteration order is registration
    order.
    """

    def __init__(self, specs: Optional[List[CheckSpec]] = None):
        self._checks: Dict[str, CheckSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: CheckSpec) -> CheckSpec:
        """
        Register a check definition.

        Args:
            spec: CheckSpec to add

        Returns:
            The registered spec

        Raises:
            DuplicateCheckError: If a check with the same id exists
                (the registry is left unchanged)
        """
        if not isinstance(spec, CheckSpec):
            raise TypeError(f"Expected CheckSpec, got {type(spec).__name__}")

        if spec.id in self._checks:
            raise DuplicateCheckError(spec.id)

        self._checks[spec.id] = spec
        logger.debug(
            f"Registered health check: {spec.id} "
            f"(severity={spec.severity.value}, timeout={spec.timeout_seconds}s)"
        )
        return spec

    def add(
        self,
        check_id: str,
        probe: Probe,
        *,
        severity: Union[Severity, str] = Severity.CRITICAL,
        timeout_seconds: Union[float, timedelta, None] = None,
        description: str = "",
    ) -> CheckSpec:
        """
        Build a CheckSpec from parts and register it.

        Args:
            check_id: Unique check id
            probe: Zero-argument callable (sync or async)
            severity: CRITICAL, WARNING or INFO
            timeout_seconds: Per-run deadline (configured default if None)
            description: Optional human-readable summary

        Returns:
            The registered spec
        """
        if timeout_seconds is None:
            timeout_seconds = get_defaults().default_timeout_seconds

        spec = CheckSpec(
            id=check_id,
            severity=severity,
            timeout_seconds=timeout_seconds,
            probe=probe,
            description=description,
        )
        return self.register(spec)

    def check(
        self,
        check_id: str,
        *,
        severity: Union[Severity, str] = Severity.CRITICAL,
        timeout_seconds: Union[float, timedelta, None] = None,
        description: str = "",
    ) -> Callable[[Probe], Probe]:
        """
        Decorator to register a probe function.

        Example:
            @registry.check("db", severity="CRITICAL", timeout_seconds=2)
            async def db_reachable():
                conn = await asyncpg.connect(DATABASE_URL)
                await conn.execute("SELECT 1")
                await conn.close()
                return "connected"
        """
        def decorator(probe: Probe) -> Probe:
            self.add(
                check_id,
                probe,
                severity=severity,
                timeout_seconds=timeout_seconds,
                description=description or (probe.__doc__ or "").strip(),
            )
            return probe

        return decorator

    def get(self, check_id: str) -> Optional[CheckSpec]:
        """Get check definition by id."""
        return self._checks.get(check_id)

    def all(self) -> List[CheckSpec]:
        """Get all registered checks in registration order."""
        return list(self._checks.values())

    def ids(self) -> List[str]:
        """Get all registered ids in registration order."""
        return list(self._checks)

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, check_id: str) -> bool:
        return check_id in self._checks

    def __iter__(self) -> Iterator[CheckSpec]:
        return iter(self.all())


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckRegistry",
    "RegistryError",
    "DuplicateCheckError",
]
