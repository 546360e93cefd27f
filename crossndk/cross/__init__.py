"""
Cross-compilation targets for crossndk.

This module provides the fixed set of Android ABIs and the ordered,
deduplicated TargetSet the build loop iterates over.
"""

from crossndk.cross.targets import Target, TargetSet, DEFAULT_TARGETS

__all__ = [
    "Target",
    "TargetSet",
    "DEFAULT_TARGETS",
]
