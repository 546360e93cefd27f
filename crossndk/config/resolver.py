"""Target and API level resolution.

Explicit command-line selections win outright over project defaults; the two
target lists are never merged.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from crossndk.config.parser import NdkConfig
from crossndk.core.exceptions import EmptyTargetSetError
from crossndk.cross.targets import Target, TargetSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTargets:
    """Final set of targets and API level for a run."""

    targets: TargetSet
    platform: int


def resolve_targets(
    cli_targets: Iterable[Target],
    cli_platform: Optional[int],
    config: NdkConfig,
) -> ResolvedTargets:
    """
    Resolve what to build.

    Args:
        cli_targets: Targets given on the command line (may be empty)
        cli_platform: API level given on the command line, or None
        config: Project defaults

    Returns:
        Targets and API level to build with

    Raises:
        EmptyTargetSetError: If neither source yields a target
    """
    explicit = TargetSet(cli_targets)
    if explicit:
        targets = explicit
        logger.debug(f"Using targets from command line: {targets}")
    else:
        targets = config.targets
        logger.debug(f"Using targets from project config: {targets}")

    if not targets:
        raise EmptyTargetSetError(
            "No targets to build. Pass --target or set "
            "package.metadata.ndk.targets in Cargo.toml."
        )

    platform = cli_platform if cli_platform is not None else config.platform

    return ResolvedTargets(targets=targets, platform=platform)
