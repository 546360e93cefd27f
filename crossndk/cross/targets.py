"""
Android cross-compilation targets.

This module defines the fixed set of Android ABIs crossndk can build for, and
the names each one goes by: the ABI directory name used in jniLibs layouts,
the Rust target triple, the clang target prefix and the binutils prefix.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple

from crossndk.core.exceptions import InvalidTargetError


@dataclass(frozen=True)
class _TargetSpec:
    abi: str
    triple: str
    clang_prefix: str
    binutils_prefix: str


class Target(Enum):
    """
    Supported Android target architecture.

    Each member carries its ABI name (the display form, also the output
    subdirectory name) and its Rust target triple.

    Example:
        >>> Target.parse("arm64-v8a").triple
        'aarch64-linux-android'
        >>> str(Target.ARMEABI_V7A)
        'armeabi-v7a'
    """

    ARMEABI_V7A = _TargetSpec(
        abi="armeabi-v7a",
        triple="armv7-linux-androideabi",
        clang_prefix="armv7a-linux-androideabi",
        binutils_prefix="arm-linux-androideabi",
    )
    ARM64_V8A = _TargetSpec(
        abi="arm64-v8a",
        triple="aarch64-linux-android",
        clang_prefix="aarch64-linux-android",
        binutils_prefix="aarch64-linux-android",
    )
    X86 = _TargetSpec(
        abi="x86",
        triple="i686-linux-android",
        clang_prefix="i686-linux-android",
        binutils_prefix="i686-linux-android",
    )
    X86_64 = _TargetSpec(
        abi="x86_64",
        triple="x86_64-linux-android",
        clang_prefix="x86_64-linux-android",
        binutils_prefix="x86_64-linux-android",
    )

    @property
    def abi(self) -> str:
        """Android ABI name (e.g., 'arm64-v8a')."""
        return self.value.abi

    @property
    def triple(self) -> str:
        """Rust target triple (e.g., 'aarch64-linux-android')."""
        return self.value.triple

    @property
    def binutils_prefix(self) -> str:
        """Prefix of the pre-r23 GNU binutils executables for this target."""
        return self.value.binutils_prefix

    def clang_target(self, platform: int) -> str:
        """
        Get the clang target name for an API level.

        Args:
            platform: Android API level

        Returns:
            Clang target (e.g., 'armv7a-linux-androideabi21')
        """
        return f"{self.value.clang_prefix}{platform}"

    @classmethod
    def parse(cls, value: str) -> "Target":
        """
        Parse a target from its ABI name or its Rust triple.

        Args:
            value: 'arm64-v8a' or 'aarch64-linux-android', etc.

        Returns:
            Matching Target

        Raises:
            InvalidTargetError: If value names no supported target
        """
        text = str(value).strip()
        for target in cls:
            if text in (target.abi, target.triple):
                return target

        raise InvalidTargetError(text, ", ".join(t.abi for t in cls))

    def __str__(self) -> str:
        return self.abi


DEFAULT_TARGETS: Tuple[Target, ...] = (
    Target.ARMEABI_V7A,
    Target.ARM64_V8A,
    Target.X86,
    Target.X86_64,
)


class TargetSet:
    """
    Ordered, deduplicated, immutable sequence of targets.

    The first occurrence of a target fixes its position.

    Example:
        >>> ts = TargetSet([Target.X86, Target.ARM64_V8A, Target.X86])
        >>> [str(t) for t in ts]
        ['x86', 'arm64-v8a']
    """

    __slots__ = ("_targets",)

    def __init__(self, targets: Iterable[Target] = ()):
        ordered = []
        for target in targets:
            if target not in ordered:
                ordered.append(target)
        self._targets = tuple(ordered)

    @classmethod
    def parse(cls, values: Iterable[str]) -> "TargetSet":
        """Build a TargetSet from ABI names or triples."""
        return cls(Target.parse(v) for v in values)

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __bool__(self) -> bool:
        return bool(self._targets)

    def __getitem__(self, index: int) -> Target:
        return self._targets[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, TargetSet):
            return self._targets == other._targets
        if isinstance(other, (list, tuple)):
            return self._targets == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._targets)

    def __repr__(self) -> str:
        return f"TargetSet({[t.abi for t in self._targets]!r})"

    def __str__(self) -> str:
        return ", ".join(str(t) for t in self._targets)
