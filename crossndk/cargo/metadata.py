"""
Cargo workspace metadata.

Only the target directory is needed: it is where cargo writes
``<triple>/<profile>/*.so``.
"""

import json
import logging
import subprocess
from pathlib import Path

from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def cargo_target_dir(manifest_path: Path, cargo: str = "cargo") -> Path:
    """
    Ask cargo for the workspace target directory.

    Honors CARGO_TARGET_DIR, build.target-dir and workspace layout because
    cargo itself resolves them.

    Args:
        manifest_path: Path to Cargo.toml
        cargo: Cargo executable

    Returns:
        Absolute target directory

    Raises:
        ConfigError: If cargo metadata fails or returns unexpected output
    """
    cmd = [
        cargo,
        "metadata",
        "--format-version",
        "1",
        "--no-deps",
        "--manifest-path",
        str(manifest_path),
    ]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ConfigError(f"Could not run '{cargo}': {e}")

    if result.returncode != 0:
        raise ConfigError(
            f"cargo metadata failed ({result.returncode}): {result.stderr.strip()}"
        )

    try:
        metadata = json.loads(result.stdout)
        target_dir = Path(metadata["target_directory"])
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ConfigError(f"Unexpected cargo metadata output: {e}")

    logger.debug(f"Cargo target directory: {target_dir}")
    return target_dir
