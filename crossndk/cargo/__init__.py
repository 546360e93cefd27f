"""
Cargo integration: per-target builds, workspace metadata and stripping.
"""

from crossndk.cargo.invoker import CargoInvoker, build_environment, cargo_env_key
from crossndk.cargo.metadata import cargo_target_dir
from crossndk.cargo.strip import NdkStripper

__all__ = [
    "CargoInvoker",
    "build_environment",
    "cargo_env_key",
    "cargo_target_dir",
    "NdkStripper",
]
