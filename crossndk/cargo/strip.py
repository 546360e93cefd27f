"""
Strip shared libraries with the NDK's strip tool.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from ..core.exceptions import StripError
from ..core.platform import HostInfo
from ..cross.targets import Target
from ..ndk.toolchain import NdkToolchain

logger = logging.getLogger(__name__)


class NdkStripper:
    """Runs llvm-strip (or the target's binutils strip on old NDKs) in place."""

    def __init__(self, host: Optional[HostInfo] = None):
        self.host = host

    def strip(self, ndk_home: Path, triple: str, path: Path) -> None:
        """
        Strip a file in place.

        Args:
            ndk_home: NDK root
            triple: Rust target triple the file was built for
            path: File to strip

        Raises:
            StripError: If the tool is missing or exits non-zero
        """
        toolchain = NdkToolchain.for_ndk(ndk_home, self.host)
        tool = toolchain.strip(Target.parse(triple))

        try:
            result = subprocess.run(
                [str(tool), str(path)],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise StripError(f"Could not run {tool}: {e}")

        if result.returncode != 0:
            raise StripError(
                f"{tool.name} exited with {result.returncode}: {result.stderr.strip()}"
            )

        logger.debug(f"Stripped {path}")
