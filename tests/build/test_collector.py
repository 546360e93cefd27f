"""
Tests for artifact collection.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from crossndk.build.collector import (
    ArtifactCollector,
    StepPolicy,
    find_artifacts,
)
from crossndk.build.orchestrator import BuildOutcome, profile_output_dir
from crossndk.core.exceptions import ArtifactCopyError, ArtifactError, StripError
from crossndk.cross.targets import Target


def built(target_dir, targets, is_release):
    """Successful outcomes as the build loop reports them."""
    return [
        BuildOutcome(
            target=t, exit_code=0, output_dir=profile_output_dir(target_dir, t, is_release)
        )
        for t in targets
    ]


@pytest.fixture
def target_dir(tmp_path):
    return tmp_path / "target"


@pytest.fixture
def dest(tmp_path):
    return tmp_path / "jniLibs"


class TestFindArtifacts:
    """Tests for find_artifacts()."""

    def test_only_shared_libraries(self, target_dir, make_libs):
        out = make_libs(
            target_dir,
            "aarch64-linux-android",
            "debug",
            ["libb.so", "liba.so", "libdemo.a", "libdemo.d", "libdemo.rlib"],
        )
        (out / "deps").mkdir()
        (out / "deps" / "libinner.so").write_bytes(b"")

        artifacts = find_artifacts(out, Target.ARM64_V8A)

        assert [a.path.name for a in artifacts] == ["liba.so", "libb.so"]
        assert all(a.target is Target.ARM64_V8A for a in artifacts)

    def test_unreadable_directory(self, target_dir, make_libs):
        out = make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])

        with patch.object(Path, "iterdir", side_effect=PermissionError("denied")):
            with pytest.raises(ArtifactError, match="denied"):
                find_artifacts(out, Target.X86)

    def test_missing_directory(self, target_dir, caplog):
        with caplog.at_level(logging.WARNING):
            result = find_artifacts(target_dir / "nope", Target.X86)

        assert result == []
        assert "not found" in caplog.text


class TestArtifactCollector:
    """Tests for ArtifactCollector.collect()."""

    def test_copies_into_abi_dirs(self, tmp_path, target_dir, dest, make_libs, make_stripper):
        make_libs(target_dir, "aarch64-linux-android", "release", ["libdemo.so"])
        make_libs(target_dir, "armv7-linux-androideabi", "release", ["libdemo.so"])
        stripper = make_stripper()
        collector = ArtifactCollector(tmp_path / "ndk", stripper)

        outcomes = built(target_dir, [Target.ARM64_V8A, Target.ARMEABI_V7A], True)

        delivered = collector.collect(outcomes, dest)

        assert delivered == [
            dest / "arm64-v8a" / "libdemo.so",
            dest / "armeabi-v7a" / "libdemo.so",
        ]
        assert (dest / "arm64-v8a" / "libdemo.so").read_bytes() == b"\x7fELFlibdemo.so"
        assert [call[1] for call in stripper.calls] == [
            "aarch64-linux-android",
            "armv7-linux-androideabi",
        ]
        assert stripper.calls[0][2] == dest / "arm64-v8a" / "libdemo.so"

    def test_profile_selects_source(self, tmp_path, target_dir, dest, make_libs, make_stripper):
        make_libs(target_dir, "x86_64-linux-android", "debug", ["libdbg.so"])
        make_libs(target_dir, "x86_64-linux-android", "release", ["librel.so"])
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        delivered = collector.collect(built(target_dir, [Target.X86_64], False), dest)

        assert [p.name for p in delivered] == ["libdbg.so"]

    def test_dest_dir_created_without_artifacts(self, tmp_path, target_dir, dest, make_stripper):
        """The per-ABI directory exists even when nothing was built."""
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        delivered = collector.collect(built(target_dir, [Target.X86], True), dest)

        assert delivered == []
        assert (dest / "x86").is_dir()
        assert list((dest / "x86").iterdir()) == []

    def test_overwrites_existing(self, tmp_path, target_dir, dest, make_libs, make_stripper):
        make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        (dest / "x86").mkdir(parents=True)
        (dest / "x86" / "libdemo.so").write_bytes(b"stale")
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        collector.collect(built(target_dir, [Target.X86], False), dest)

        assert (dest / "x86" / "libdemo.so").read_bytes() == b"\x7fELFlibdemo.so"

    def test_strip_failure_ignored(self, tmp_path, target_dir, dest, make_libs, make_stripper):
        make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        stripper = make_stripper(error=StripError("llvm-strip exited with 1"))
        collector = ArtifactCollector(tmp_path / "ndk", stripper)

        delivered = collector.collect(built(target_dir, [Target.X86], False), dest)

        assert delivered == [dest / "x86" / "libdemo.so"]
        assert (dest / "x86" / "libdemo.so").exists()

    def test_strip_failure_fatal_when_requested(
        self, tmp_path, target_dir, dest, make_libs, make_stripper
    ):
        make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        stripper = make_stripper(error=StripError("boom"))
        collector = ArtifactCollector(
            tmp_path / "ndk", stripper, strip_policy=StepPolicy.FATAL_ON_ERROR
        )

        with pytest.raises(StripError):
            collector.collect(built(target_dir, [Target.X86], False), dest)

    def test_copy_failure_is_fatal(self, tmp_path, target_dir, dest, make_libs, make_stripper):
        make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        stripper = make_stripper()
        collector = ArtifactCollector(tmp_path / "ndk", stripper)

        with patch("crossndk.build.collector.shutil.copy", side_effect=OSError("disk full")):
            with pytest.raises(ArtifactCopyError, match="disk full"):
                collector.collect(built(target_dir, [Target.X86], False), dest)

        assert stripper.calls == []

    def test_copy_failure_best_effort(
        self, tmp_path, target_dir, dest, make_libs, make_stripper
    ):
        make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        stripper = make_stripper()
        collector = ArtifactCollector(
            tmp_path / "ndk", stripper, copy_policy=StepPolicy.BEST_EFFORT
        )

        with patch("crossndk.build.collector.shutil.copy", side_effect=OSError("disk full")):
            delivered = collector.collect(built(target_dir, [Target.X86], False), dest)

        assert delivered == []
        assert stripper.calls == []

    def test_dest_root_not_creatable(self, tmp_path, target_dir, make_stripper):
        blocker = tmp_path / "file"
        blocker.write_text("")
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        with pytest.raises(ArtifactCopyError):
            collector.collect(built(target_dir, [Target.X86], False), blocker)

    def test_copy_logged(self, tmp_path, target_dir, dest, make_libs, make_stripper, caplog):
        out = make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        with caplog.at_level(logging.INFO):
            collector.collect(built(target_dir, [Target.X86], False), dest)

        assert f"{out / 'libdemo.so'} -> {dest / 'x86' / 'libdemo.so'}" in caplog.text


    def test_failed_outcomes_skipped(self, tmp_path, target_dir, dest, make_libs, make_stripper):
        make_libs(target_dir, "i686-linux-android", "debug", ["libdemo.so"])
        outcomes = [BuildOutcome(target=Target.X86, exit_code=101)]
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        assert collector.collect(outcomes, dest) == []
        assert not (dest / "x86").exists()

    def test_reads_outcome_output_dir(self, tmp_path, dest, make_libs, make_stripper):
        """Libraries are taken from wherever the build reported its output."""
        elsewhere = make_libs(tmp_path / "custom", "out", "dir", ["libdemo.so"])
        outcomes = [BuildOutcome(target=Target.X86_64, exit_code=0, output_dir=elsewhere)]
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        delivered = collector.collect(outcomes, dest)

        assert delivered == [dest / "x86_64" / "libdemo.so"]

    def test_outcome_without_output_dir(self, tmp_path, dest, make_stripper):
        outcomes = [BuildOutcome(target=Target.X86, exit_code=0)]
        collector = ArtifactCollector(tmp_path / "ndk", make_stripper())

        with pytest.raises(ArtifactError, match="x86"):
            collector.collect(outcomes, dest)
