"""
Project configuration for crossndk.

This module loads build defaults from Cargo.toml (and an optional YAML overlay)
and resolves them against command-line selections.
"""

from crossndk.config.parser import (
    NdkConfig,
    load_config,
    DEFAULT_PLATFORM,
    OVERLAY_FILE_NAME,
)
from crossndk.config.resolver import ResolvedTargets, resolve_targets

__all__ = [
    "NdkConfig",
    "load_config",
    "DEFAULT_PLATFORM",
    "OVERLAY_FILE_NAME",
    "ResolvedTargets",
    "resolve_targets",
]
