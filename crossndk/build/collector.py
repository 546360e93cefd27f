"""
Artifact collection into a jniLibs-style tree.

After every target has built, the shared libraries in each successful
BuildOutcome's output directory are copied to ``<dest>/<abi>/<name>.so``
and stripped.

Each post-build step has an explicit failure policy. By default, a failed copy
is fatal, because the caller explicitly asked for the output, and a failed
strip is ignored. An unstripped library is still deliverable.
"""

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..core.exceptions import ArtifactCopyError, ArtifactError, CrossNdkError
from ..cross.targets import Target
from .orchestrator import BuildOutcome

logger = logging.getLogger(__name__)

SHARED_LIBRARY_SUFFIX = ".so"


class StepPolicy(Enum):
    """What to do when a collection step fails."""

    FATAL_ON_ERROR = "fatal"
    BEST_EFFORT = "best-effort"


@dataclass(frozen=True)
class Artifact:
    """A built shared library and the target it was built for."""

    path: Path
    target: Target


def find_artifacts(directory: Path, target: Target) -> List[Artifact]:
    """
    List the shared libraries directly inside a directory.

    Args:
        directory: Cargo profile output directory
        target: Target the directory belongs to

    Returns:
        Artifacts sorted by file name; empty if the directory does not exist

    Raises:
        ArtifactError: If the directory exists but cannot be read
    """
    try:
        if not directory.is_dir():
            logger.warning(f"Build output directory not found: {directory}")
            return []

        return [
            Artifact(path=entry, target=target)
            for entry in sorted(directory.iterdir())
            if entry.is_file() and entry.suffix == SHARED_LIBRARY_SUFFIX
        ]
    except OSError as e:
        raise ArtifactError(f"Could not list build outputs in {directory}: {e}")


def _run_step(
    policy: StepPolicy, description: str, action: Callable[[], None]
) -> bool:
    """
    Run one step under a failure policy.

    Returns:
        True if the step succeeded, False if it failed under BEST_EFFORT
    """
    try:
        action()
        return True
    except (OSError, CrossNdkError) as e:
        if policy is StepPolicy.FATAL_ON_ERROR:
            raise
        logger.debug(f"Ignoring failed {description}: {e}")
        return False


class ArtifactCollector:
    """
    Copies built libraries into per-ABI directories and strips them.

    The stripper is any object with a ``strip(ndk_home, triple, path)``
    method, normally an NdkStripper.
    """

    def __init__(
        self,
        ndk_home: Path,
        stripper,
        copy_policy: StepPolicy = StepPolicy.FATAL_ON_ERROR,
        strip_policy: StepPolicy = StepPolicy.BEST_EFFORT,
    ):
        self.ndk_home = ndk_home
        self.stripper = stripper
        self.copy_policy = copy_policy
        self.strip_policy = strip_policy

    def collect(self, outcomes: Iterable[BuildOutcome], dest_root: Path) -> List[Path]:
        """
        Collect the artifacts of every successful build.

        Args:
            outcomes: Build outcomes; failed ones are skipped
            dest_root: Root of the output tree

        Returns:
            Paths of the delivered libraries

        Raises:
            ArtifactError: If an outcome has no output directory or it cannot
                be read
            ArtifactCopyError: If a copy fails under FATAL_ON_ERROR
        """
        delivered = []

        for outcome in outcomes:
            if not outcome.ok:
                continue
            target = outcome.target
            if outcome.output_dir is None:
                raise ArtifactError(f"No build output directory recorded for {target}")

            arch_dir = dest_root / target.abi
            try:
                arch_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ArtifactCopyError(f"Could not create {arch_dir}: {e}")

            logger.debug(f"Target path: {outcome.output_dir}")

            for artifact in find_artifacts(outcome.output_dir, target):
                dest = self._deliver(artifact, arch_dir)
                if dest is not None:
                    delivered.append(dest)

        return delivered

    def _deliver(self, artifact: Artifact, arch_dir: Path) -> Optional[Path]:
        dest = arch_dir / artifact.path.name
        logger.info(f"{artifact.path} -> {dest}")

        try:
            copied = _run_step(
                self.copy_policy,
                f"copy of {artifact.path}",
                lambda: shutil.copy(artifact.path, dest),
            )
        except OSError as e:
            raise ArtifactCopyError(f"Failed to copy {artifact.path} to {dest}: {e}")

        if not copied:
            return None

        _run_step(
            self.strip_policy,
            f"strip of {dest}",
            lambda: self.stripper.strip(self.ndk_home, artifact.target.triple, dest),
        )
        return dest
