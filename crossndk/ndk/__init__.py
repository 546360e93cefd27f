"""
Android NDK discovery and inspection.
"""

from crossndk.ndk.locator import (
    FileSystem,
    NdkSearcher,
    EnvVarSearcher,
    SdkBundleSearcher,
    AndroidStudioSearcher,
    NdkLocator,
    default_searchers,
)
from crossndk.ndk.revision import read_revision, uses_llvm_tools
from crossndk.ndk.toolchain import NdkToolchain

__all__ = [
    "FileSystem",
    "NdkSearcher",
    "EnvVarSearcher",
    "SdkBundleSearcher",
    "AndroidStudioSearcher",
    "NdkLocator",
    "default_searchers",
    "read_revision",
    "uses_llvm_tools",
    "NdkToolchain",
]
