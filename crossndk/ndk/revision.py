"""
NDK revision detection.

Every NDK carries a ``source.properties`` file at its root with a line such as
``Pkg.Revision = 25.2.9519653``. The revision decides which binary tools the
NDK ships: r23 removed GNU binutils in favour of the llvm-* tools.
"""

import logging
from pathlib import Path
from typing import Optional

from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

#: First NDK release without GNU binutils
LLVM_TOOLS_MIN_MAJOR = 23


def read_revision(ndk_home: Path) -> Optional[Version]:
    """
    Read the NDK revision from source.properties.

    Args:
        ndk_home: NDK root directory

    Returns:
        Parsed revision, or None if the file is missing or unparsable
    """
    properties = ndk_home / "source.properties"

    try:
        content = properties.read_text(encoding="utf-8")
    except OSError:
        logger.debug(f"No readable source.properties in {ndk_home}")
        return None

    for line in content.splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip() == "Pkg.Revision":
            try:
                return Version(value.strip())
            except InvalidVersion:
                logger.debug(f"Unparsable NDK revision: {value.strip()!r}")
                return None

    logger.debug(f"Pkg.Revision not found in {properties}")
    return None


def uses_llvm_tools(revision: Optional[Version]) -> bool:
    """
    Check whether an NDK revision ships llvm-ar/llvm-strip only.

    Unknown revisions are assumed to be modern.
    """
    if revision is None:
        return True
    return revision.major >= LLVM_TOOLS_MIN_MAJOR
