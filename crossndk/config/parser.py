"""Project configuration loader for crossndk.

Build defaults come from the ``[package.metadata.ndk]`` table of the project's
Cargo.toml, optionally overlaid by a ``crossndk.yaml`` file:

    [package.metadata.ndk]
    targets = ["arm64-v8a", "armeabi-v7a"]
    platform = 24

    [package.metadata.ndk.release]
    platform = 26

The ``release``/``debug`` sub-tables override the base values for that
profile. Layers, lowest precedence first: built-in defaults, Cargo.toml
base, Cargo.toml profile, YAML base, YAML profile.
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from crossndk.core.exceptions import ConfigError, InvalidTargetError
from crossndk.cross.targets import DEFAULT_TARGETS, TargetSet

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM = 21
OVERLAY_FILE_NAME = "crossndk.yaml"


@dataclass(frozen=True)
class NdkConfig:
    """Resolved project build defaults."""

    targets: TargetSet
    platform: int = DEFAULT_PLATFORM


# A layer's (targets, platform); None means "not set in this layer"
_Layer = Tuple[Optional[TargetSet], Optional[int]]


def load_config(
    manifest_path: Path, is_release: bool, overlay_path: Optional[Path] = None
) -> NdkConfig:
    """
    Load build defaults for a Cargo project.

    Args:
        manifest_path: Path to Cargo.toml
        is_release: Select the release (True) or debug (False) profile overrides
        overlay_path: Optional YAML overlay; when None, ``crossndk.yaml`` next
            to the manifest is used if it exists

    Returns:
        Resolved configuration

    Raises:
        ConfigError: If the manifest or overlay is missing, malformed or invalid
    """
    profile = "release" if is_release else "debug"
    layers = []

    ndk_table = _read_manifest_table(manifest_path)
    layers.extend(_profile_layers(ndk_table, profile, str(manifest_path)))

    if overlay_path is None:
        candidate = manifest_path.parent / OVERLAY_FILE_NAME
        overlay_path = candidate if candidate.exists() else None
    elif not overlay_path.exists():
        raise ConfigError(f"Configuration file not found: {overlay_path}")

    if overlay_path is not None:
        overlay = _read_overlay(overlay_path)
        layers.extend(_profile_layers(overlay, profile, str(overlay_path)))

    targets = TargetSet(DEFAULT_TARGETS)
    platform = DEFAULT_PLATFORM
    for layer_targets, layer_platform in layers:
        if layer_targets is not None:
            targets = layer_targets
        if layer_platform is not None:
            platform = layer_platform

    logger.debug(f"Config ({profile}): targets={targets}, platform={platform}")
    return NdkConfig(targets=targets, platform=platform)


def _read_manifest_table(manifest_path: Path) -> Dict[str, Any]:
    """Read [package.metadata.ndk] from Cargo.toml (empty if absent)."""
    if not manifest_path.exists():
        raise ConfigError(f"Manifest not found: {manifest_path}")

    try:
        with open(manifest_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {manifest_path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {manifest_path}: {e}")

    # Virtual workspace manifests have no [package]
    package = data.get("package")
    if not isinstance(package, dict):
        logger.debug(f"No [package] table in {manifest_path}, using defaults")
        return {}

    metadata = package.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ConfigError(f"package.metadata must be a table in {manifest_path}")

    ndk = metadata.get("ndk") or {}
    if not isinstance(ndk, dict):
        raise ConfigError(f"package.metadata.ndk must be a table in {manifest_path}")

    return ndk


def _read_overlay(overlay_path: Path) -> Dict[str, Any]:
    """Read the YAML overlay file."""
    logger.debug(f"Loading configuration overlay from {overlay_path}")

    try:
        with open(overlay_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {overlay_path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {overlay_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{overlay_path} must contain a mapping")

    return data


def _profile_layers(table: Dict[str, Any], profile: str, source: str) -> list:
    """Split a table into its base layer and the selected profile layer."""
    layers = [_parse_layer(table, source)]

    profile_table = table.get(profile)
    if profile_table is not None:
        if not isinstance(profile_table, dict):
            raise ConfigError(f"'{profile}' must be a table in {source}")
        layers.append(_parse_layer(profile_table, f"{source} [{profile}]"))

    return layers


def _parse_layer(table: Dict[str, Any], source: str) -> _Layer:
    """Parse the targets/platform keys of one table."""
    targets = None
    platform = None

    if "targets" in table:
        raw = table["targets"]
        if not isinstance(raw, list) or not all(isinstance(t, str) for t in raw):
            raise ConfigError(f"'targets' must be a list of strings in {source}")
        try:
            targets = TargetSet.parse(raw)
        except InvalidTargetError as e:
            raise ConfigError(f"{e} in {source}")

    if "platform" in table:
        raw = table["platform"]
        # bool is an int subclass
        if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw <= 255:
            raise ConfigError(
                f"'platform' must be an integer between 0 and 255 in {source}"
            )
        platform = raw

    return targets, platform
