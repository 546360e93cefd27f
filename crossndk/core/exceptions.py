"""
Centralized exception hierarchy for crossndk.

This module defines all custom exceptions used across the codebase
so that the CLI can map each failure class to its own exit path.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class CrossNdkError(Exception):
    """Base exception for all crossndk errors."""

    pass


# ============================================================================
# NDK Discovery Exceptions
# ============================================================================


class NdkNotFoundError(CrossNdkError):
    """Raised when no discovery strategy produced an NDK path."""

    def __init__(self, message: str = "Could not find any NDK."):
        super().__init__(message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(CrossNdkError):
    """Project configuration parsing or validation error."""

    pass


# ============================================================================
# Target Exceptions
# ============================================================================


class TargetError(CrossNdkError):
    """Base exception for target selection errors."""

    pass


class InvalidTargetError(TargetError, ValueError):
    """Raised when a string does not name a supported target."""

    def __init__(self, value: str, supported: str = ""):
        self.value = value
        msg = f"Unsupported target: {value}"
        if supported:
            msg += f" (expected one of: {supported})"
        super().__init__(msg)


class EmptyTargetSetError(TargetError):
    """Raised when target resolution yields nothing to build."""

    pass


# ============================================================================
# Build Exceptions
# ============================================================================


class BuildError(CrossNdkError):
    """Base exception for build errors."""

    pass


class BuildInvocationError(BuildError):
    """Raised when the build tool could not be started at all."""

    pass


class TargetBuildFailure(BuildError):
    """Raised when a per-target build returns a non-zero exit status."""

    def __init__(self, target, exit_code: int):
        self.target = target
        self.exit_code = exit_code
        super().__init__(f"Build for {target} failed with exit code {exit_code}")


# ============================================================================
# Artifact Exceptions
# ============================================================================


class ArtifactError(CrossNdkError):
    """Base exception for artifact collection errors."""

    pass


class ArtifactCopyError(ArtifactError):
    """Raised when a discovered artifact cannot be copied to the output tree."""

    pass


class StripError(ArtifactError):
    """Raised when the strip tool fails on an artifact."""

    pass
