"""
Multi-target build loop.

Targets are built one after another. The first non-zero exit status ends the
run: no later target is invoked and the failing status becomes the result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.exceptions import EmptyTargetSetError
from ..cross.targets import Target, TargetSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildOutcome:
    """
    Result of building one target.

    Attributes:
        target: Target that was built
        exit_code: Build tool exit status
        output_dir: Where the build wrote its artifacts (success only)
    """

    target: Target
    exit_code: int
    output_dir: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class BuildResult:
    """Terminal result of the build loop."""

    outcomes: List[BuildOutcome] = field(default_factory=list)
    failure: Optional[BuildOutcome] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return self.failure.exit_code if self.failure else 0


def profile_output_dir(target_dir: Path, target: Target, is_release: bool) -> Path:
    """
    Get cargo's output directory for a target and profile.

    Example:
        >>> profile_output_dir(Path("target"), Target.X86, True)
        PosixPath('target/i686-linux-android/release')
    """
    return target_dir / target.triple / ("release" if is_release else "debug")


class BuildOrchestrator:
    """
    Builds every target in sequence with abort-on-first-failure.

    The invoker is any object with a ``run(project_dir, ndk_home, triple,
    platform, cargo_args) -> int`` method, normally a CargoInvoker.
    """

    def __init__(self, invoker):
        self.invoker = invoker

    def run(
        self,
        targets: TargetSet,
        ndk_home: Path,
        platform: int,
        cargo_args: Sequence[str],
        project_dir: Path,
        target_dir: Optional[Path] = None,
        is_release: bool = False,
    ) -> BuildResult:
        """
        Build all targets.

        Args:
            targets: Targets to build, in order
            ndk_home: NDK root
            platform: Android API level
            cargo_args: Arguments passed through to cargo
            project_dir: Directory cargo runs in
            target_dir: Cargo target directory, used to fill BuildOutcome.output_dir
            is_release: Profile used for BuildOutcome.output_dir

        Returns:
            BuildResult; ``failure`` is set to the first failing target

        Raises:
            EmptyTargetSetError: If targets is empty
        """
        if not targets:
            raise EmptyTargetSetError("No targets to build")

        result = BuildResult()

        for target in targets:
            triple = target.triple
            logger.info(f"Building {target} ({triple})")

            code = self.invoker.run(project_dir, ndk_home, triple, platform, cargo_args)

            if code != 0:
                outcome = BuildOutcome(target=target, exit_code=code)
                result.outcomes.append(outcome)
                result.failure = outcome
                _log_failure_guidance(triple)
                break

            output_dir = None
            if target_dir is not None:
                output_dir = profile_output_dir(target_dir, target, is_release)
            result.outcomes.append(
                BuildOutcome(target=target, exit_code=0, output_dir=output_dir)
            )

        return result


def _log_failure_guidance(triple: str) -> None:
    logger.info("If the build failed due to a missing target, you can run this command:")
    logger.info("")
    logger.info(f"    rustup target install {triple}")
