"""
Shared utilities for the crossndk CLI.

Exit codes, user-facing messages and small path helpers.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# Exit Codes
# ============================================================================

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2  # argparse's own code
EXIT_NDK_NOT_FOUND = 3
EXIT_ARTIFACT_ERROR = 4
EXIT_INTERRUPTED = 130


# ============================================================================
# Messages
# ============================================================================

NDK_NOT_FOUND_HELP = (
    "Set the environment ANDROID_NDK_HOME to your NDK installation's root directory,\n"
    "or install the NDK using Android Studio."
)


def log_ndk_not_found():
    """Log the NDK discovery failure with remediation steps."""
    logger.error("Could not find any NDK.")
    logger.error(NDK_NOT_FOUND_HELP)


def format_target_list(targets: Iterable) -> str:
    """Join targets by their display names."""
    return ", ".join(str(t) for t in targets)


# ============================================================================
# Path Utilities
# ============================================================================


def is_release_build(argv: Iterable[str]) -> bool:
    """
    Check whether cargo is asked for a release build.

    Args:
        argv: Full command line (crossndk options and cargo arguments)
    """
    return "--release" in argv


def resolve_manifest(path: Optional[Path] = None) -> Path:
    """
    Resolve the Cargo manifest path.

    Args:
        path: Manifest path or its directory (defaults to ./Cargo.toml)

    Returns:
        Absolute path to Cargo.toml
    """
    if path is None:
        path = Path.cwd() / "Cargo.toml"
    elif path.is_dir():
        path = path / "Cargo.toml"
    return path.resolve()


def ensure_directory(path: Path, description: str = "directory"):
    """
    Ensure directory exists, create if needed.

    Args:
        path: Directory path
        description: Description for error messages

    Raises:
        OSError: If directory cannot be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured {description} exists: {path}")
    except OSError as e:
        logger.error(f"Failed to create {description}: {e}")
        raise OSError(f"Could not create {description} at {path}: {e}")
