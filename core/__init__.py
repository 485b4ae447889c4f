# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export shared logging and configuration utilities
# ============================================================================

from core.config import HealthDefaults, get_defaults
from core.logging import configure_logging, get_logger, log_context

__all__ = [
    # Config
    "HealthDefaults",
    "get_defaults",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]
