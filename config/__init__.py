"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    SYSTEM_DEFAULTS: Packaging fallbacks used by the config builder
    VALIDATION_LIMITS: Bounds on resolved unit weights and box fill
    get_seed_snapshot: Built-in catalog and customer rules
"""

from config.settings import settings, get_settings, Settings
from config.packaging import SYSTEM_DEFAULTS, VALIDATION_LIMITS
from config.catalog import get_seed_snapshot

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Packaging
    "SYSTEM_DEFAULTS",
    "VALIDATION_LIMITS",

    # Catalog
    "get_seed_snapshot",
]
