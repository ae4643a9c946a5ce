"""
Runtime Configuration Module

Provides configuration loading and management for allowlist trees.
"""

from .runtime import (
    BuildConfig,
    EncodingConfig,
    HashConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "BuildConfig",
    "EncodingConfig",
    "HashConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
