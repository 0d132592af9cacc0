"""
Configuration Infrastructure

Contains application configuration management.
"""

from .config import (
    ConfigValidator,
    Settings,
    get_config,
    reset_config,
    validate_production_readiness,
)

__all__ = [
    "ConfigValidator",
    "Settings",
    "get_config",
    "reset_config",
    "validate_production_readiness",
]
