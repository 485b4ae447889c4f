# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for validation runs.
"""

from core.config.defaults import (
    HealthDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "HealthDefaults",
    "get_defaults",
    "reset_defaults",
]
