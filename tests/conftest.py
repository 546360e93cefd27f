"""
Pytest configuration and shared fixtures for crossndk tests.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from crossndk.core.platform import HostInfo


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require cargo and a real NDK",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )
    config.addinivalue_line("markers", "e2e: marks end-to-end pipeline tests")


# ============================================================================
# Test Doubles
# ============================================================================


class RecordingInvoker:
    """Build invoker that records calls and returns scripted exit codes."""

    def __init__(self, exit_codes: Optional[Dict[str, int]] = None):
        self.exit_codes = exit_codes or {}
        self.calls: List[Tuple[Path, Path, str, int, Tuple[str, ...]]] = []

    @property
    def triples(self) -> List[str]:
        return [call[2] for call in self.calls]

    def run(
        self,
        project_dir: Path,
        ndk_home: Path,
        triple: str,
        platform: int,
        cargo_args: Sequence[str],
    ) -> int:
        self.calls.append((project_dir, ndk_home, triple, platform, tuple(cargo_args)))
        return self.exit_codes.get(triple, 0)


class RecordingStripper:
    """Stripper that records calls and optionally raises."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[Path, str, Path]] = []

    def strip(self, ndk_home: Path, triple: str, path: Path) -> None:
        self.calls.append((ndk_home, triple, path))
        if self.error is not None:
            raise self.error


# ============================================================================
# Shared Fixtures
# ============================================================================


@pytest.fixture
def linux_host() -> HostInfo:
    """Linux x64 host."""
    return HostInfo("linux", "x64")


@pytest.fixture
def windows_host() -> HostInfo:
    """Windows x64 host."""
    return HostInfo("windows", "x64")


@pytest.fixture
def fake_ndk(tmp_path: Path) -> Path:
    """Minimal NDK r25 layout with a source.properties file."""
    ndk = tmp_path / "ndk" / "25.2.9519653"
    bin_dir = ndk / "toolchains" / "llvm" / "prebuilt" / "linux-x86_64" / "bin"
    bin_dir.mkdir(parents=True)
    (ndk / "source.properties").write_text(
        "Pkg.Desc = Android NDK\nPkg.Revision = 25.2.9519653\n"
    )
    return ndk


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """Cargo project without NDK metadata; returns the manifest path."""
    project = tmp_path / "project"
    project.mkdir()
    manifest = project / "Cargo.toml"
    manifest.write_text(
        '[package]\nname = "demo"\nversion = "0.1.0"\n\n'
        '[lib]\ncrate-type = ["cdylib"]\n'
    )
    return manifest


@pytest.fixture
def make_invoker():
    """Factory for RecordingInvoker."""
    return RecordingInvoker


@pytest.fixture
def make_stripper():
    """Factory for RecordingStripper."""
    return RecordingStripper


def write_libs(target_dir: Path, triple: str, profile: str, names: Sequence[str]) -> Path:
    """Create fake build outputs under <target_dir>/<triple>/<profile>."""
    out = target_dir / triple / profile
    out.mkdir(parents=True, exist_ok=True)
    for name in names:
        (out / name).write_bytes(b"\x7fELF" + name.encode())
    return out


@pytest.fixture
def make_libs():
    """Helper that writes fake build outputs."""
    return write_libs
