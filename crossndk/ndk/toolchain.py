"""
NDK toolchain layout.

Resolves paths to the compilers and binary tools inside an NDK's prebuilt
LLVM toolchain for a given host.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from packaging.version import Version

from ..core.platform import HostInfo, detect_host
from ..cross.targets import Target
from .revision import read_revision, uses_llvm_tools

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NdkToolchain:
    """
    Prebuilt LLVM toolchain of one NDK installation.

    Attributes:
        ndk_home: NDK root directory
        host: Host the toolchain runs on
        revision: NDK revision, None if unknown
    """

    ndk_home: Path
    host: HostInfo
    revision: Optional[Version] = None

    @classmethod
    def for_ndk(cls, ndk_home: Path, host: Optional[HostInfo] = None) -> "NdkToolchain":
        """Create a toolchain view, reading the NDK revision from disk."""
        return cls(
            ndk_home=ndk_home,
            host=host or detect_host(),
            revision=read_revision(ndk_home),
        )

    @property
    def bin_dir(self) -> Path:
        """``<ndk>/toolchains/llvm/prebuilt/<host-tag>/bin``"""
        return (
            self.ndk_home
            / "toolchains"
            / "llvm"
            / "prebuilt"
            / self.host.ndk_tag()
            / "bin"
        )

    def tool(self, name: str, script: bool = False) -> Path:
        return self.bin_dir / self.host.executable_name(name, script=script)

    def clang(self, target: Target, platform: int) -> Path:
        return self.tool(f"{target.clang_target(platform)}-clang", script=True)

    def clangxx(self, target: Target, platform: int) -> Path:
        return self.tool(f"{target.clang_target(platform)}-clang++", script=True)

    def ar(self, target: Target) -> Path:
        if uses_llvm_tools(self.revision):
            return self.tool("llvm-ar")
        return self.tool(f"{target.binutils_prefix}-ar")

    def strip(self, target: Target) -> Path:
        if uses_llvm_tools(self.revision):
            return self.tool("llvm-strip")
        return self.tool(f"{target.binutils_prefix}-strip")
