"""
Build pipeline: the per-target build loop and artifact collection.
"""

from crossndk.build.orchestrator import (
    BuildOrchestrator,
    BuildOutcome,
    BuildResult,
    profile_output_dir,
)
from crossndk.build.collector import (
    ArtifactCollector,
    Artifact,
    StepPolicy,
    find_artifacts,
    SHARED_LIBRARY_SUFFIX,
)

__all__ = [
    "BuildOrchestrator",
    "BuildOutcome",
    "BuildResult",
    "profile_output_dir",
    "ArtifactCollector",
    "Artifact",
    "StepPolicy",
    "find_artifacts",
    "SHARED_LIBRARY_SUFFIX",
]
