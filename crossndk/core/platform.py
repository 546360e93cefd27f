"""
Host platform detection for crossndk.

The NDK ships one prebuilt LLVM toolchain per host, stored under
``toolchains/llvm/prebuilt/<host-tag>``. This module detects the host OS and
maps it to that tag, and to the per-user data directory Android Studio
installs the SDK under.

Usage:
    from crossndk.core.platform import detect_host

    host = detect_host()
    print(host.ndk_tag())  # e.g. 'linux-x86_64'
"""

import functools
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class HostInfo:
    """
    Host platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos')
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm')
    """

    os: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    def ndk_tag(self) -> str:
        """
        Get the NDK prebuilt directory name for this host.

        The NDK names its host toolchains x86_64 on every architecture.

        Returns:
            Prebuilt tag ('windows-x86_64', 'darwin-x86_64', 'linux-x86_64')

        Example:
            >>> HostInfo('macos', 'arm64').ndk_tag()
            'darwin-x86_64'
        """
        if self.os == "windows":
            return "windows-x86_64"
        elif self.os == "macos":
            return "darwin-x86_64"
        return "linux-x86_64"

    def executable_name(self, tool: str, script: bool = False) -> str:
        """
        Get the host-specific file name for an NDK tool.

        Args:
            tool: Tool base name (e.g., 'llvm-strip')
            script: True for the clang wrapper scripts, which are '.cmd' on Windows

        Returns:
            File name including any Windows suffix
        """
        if not self.is_windows:
            return tool
        return f"{tool}.cmd" if script else f"{tool}.exe"

    def user_data_dir(self, environ: Optional[Mapping[str, str]] = None) -> Path:
        """
        Get the per-user directory Android Studio installs the SDK into.

        Args:
            environ: Environment snapshot (defaults to os.environ)

        Returns:
            - Windows: %LOCALAPPDATA% (fallback ~/AppData/Local)
            - macOS: ~/Library/Application Support
            - Linux: $XDG_DATA_HOME (fallback ~/.local/share)
        """
        if environ is None:
            environ = os.environ

        home = Path(environ.get("HOME") or environ.get("USERPROFILE") or Path.home())

        if self.os == "windows":
            local = environ.get("LOCALAPPDATA")
            return Path(local) if local else home / "AppData" / "Local"
        elif self.os == "macos":
            return home / "Library" / "Application Support"

        xdg = environ.get("XDG_DATA_HOME")
        return Path(xdg) if xdg else home / ".local" / "share"

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


@functools.lru_cache(maxsize=1)
def detect_host() -> HostInfo:
    """
    Detect the current host.

    This function is cached - it only runs detection once per process.

    Returns:
        HostInfo for the running interpreter
    """
    return HostInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos'

    Raises:
        RuntimeError: If OS is not supported
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "macos"
    else:
        raise RuntimeError(f"Unsupported operating system: {system}")


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def clear_host_cache():
    """
    Clear the host detection cache.

    Forces the next call to detect_host() to re-detect. Useful for testing.
    """
    detect_host.cache_clear()


__all__ = [
    "HostInfo",
    "detect_host",
    "clear_host_cache",
]
