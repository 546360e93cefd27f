"""
Cargo invocation for a single Android target.

Runs ``cargo <args> --target <triple>`` with the NDK's clang, clang++ and ar
exported through the variables cargo and the cc crate read:

- ``CC_<triple>``, ``CXX_<triple>``, ``AR_<triple>``
- ``CARGO_TARGET_<TRIPLE>_AR``, ``CARGO_TARGET_<TRIPLE>_LINKER``
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from ..core.exceptions import BuildInvocationError
from ..core.platform import HostInfo
from ..cross.targets import Target
from ..ndk.toolchain import NdkToolchain

logger = logging.getLogger(__name__)


def cargo_env_key(triple: str, suffix: str) -> str:
    """
    Get the cargo per-target config variable name.

    Example:
        >>> cargo_env_key("aarch64-linux-android", "LINKER")
        'CARGO_TARGET_AARCH64_LINUX_ANDROID_LINKER'
    """
    return f"CARGO_TARGET_{triple.replace('-', '_').upper()}_{suffix}"


def build_environment(
    toolchain: NdkToolchain,
    target: Target,
    platform: int,
    base_env: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Build the child environment for one target.

    Args:
        toolchain: NDK toolchain to compile with
        target: Target being built
        platform: Android API level
        base_env: Environment to extend (defaults to os.environ)

    Returns:
        New environment dictionary
    """
    env = dict(os.environ if base_env is None else base_env)

    triple = target.triple
    cc = str(toolchain.clang(target, platform))
    cxx = str(toolchain.clangxx(target, platform))
    ar = str(toolchain.ar(target))

    env[f"CC_{triple}"] = cc
    env[f"CXX_{triple}"] = cxx
    env[f"AR_{triple}"] = ar
    env[cargo_env_key(triple, "AR")] = ar
    env[cargo_env_key(triple, "LINKER")] = cc

    return env


class CargoInvoker:
    """
    Runs cargo configured for an NDK cross-compilation target.

    stdio is inherited, so cargo's output goes straight to the terminal.
    """

    def __init__(self, host: Optional[HostInfo] = None, cargo: str = "cargo"):
        """
        Initialize invoker.

        Args:
            host: Host information (detected if None)
            cargo: Cargo executable name or path
        """
        self.host = host
        self.cargo = cargo

    def run(
        self,
        project_dir: Path,
        ndk_home: Path,
        triple: str,
        platform: int,
        cargo_args: Sequence[str],
    ) -> int:
        """
        Build the project for one target.

        Args:
            project_dir: Directory to run cargo in
            ndk_home: NDK root
            triple: Rust target triple
            platform: Android API level
            cargo_args: Arguments passed through to cargo

        Returns:
            Cargo's exit code; -1 if it was terminated by a signal

        Raises:
            BuildInvocationError: If cargo cannot be started
        """
        target = Target.parse(triple)
        toolchain = NdkToolchain.for_ndk(ndk_home, self.host)
        env = build_environment(toolchain, target, platform)

        cmd = [self.cargo, *cargo_args, "--target", triple]
        logger.debug(f"Running: {' '.join(cmd)} (cwd={project_dir})")
        logger.debug(f"Linker: {env[cargo_env_key(triple, 'LINKER')]}")

        try:
            result = subprocess.run(cmd, cwd=project_dir, env=env, check=False)
        except FileNotFoundError as e:
            raise BuildInvocationError(
                f"Could not run '{self.cargo}': {e}. Is Rust installed and on PATH?"
            )

        if result.returncode < 0:
            logger.debug(f"cargo terminated by signal {-result.returncode}")
            return -1
        return result.returncode
