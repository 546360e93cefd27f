"""
Core utilities for crossndk: host detection and the exception hierarchy.
"""

from crossndk.core.exceptions import (
    CrossNdkError,
    NdkNotFoundError,
    ConfigError,
    TargetError,
    InvalidTargetError,
    EmptyTargetSetError,
    BuildError,
    BuildInvocationError,
    TargetBuildFailure,
    ArtifactError,
    ArtifactCopyError,
    StripError,
)
from crossndk.core.platform import HostInfo, detect_host, clear_host_cache

__all__ = [
    "CrossNdkError",
    "NdkNotFoundError",
    "ConfigError",
    "TargetError",
    "InvalidTargetError",
    "EmptyTargetSetError",
    "BuildError",
    "BuildInvocationError",
    "TargetBuildFailure",
    "ArtifactError",
    "ArtifactCopyError",
    "StripError",
    "HostInfo",
    "detect_host",
    "clear_host_cache",
]
