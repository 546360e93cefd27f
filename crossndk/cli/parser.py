"""
crossndk CLI argument parser and command runner.

Usage:
    crossndk [OPTIONS] <CARGO_ARGS>...

Options come first; everything from the first positional argument on is
passed to cargo verbatim, e.g.:

    crossndk -t arm64-v8a -t armeabi-v7a -o app/src/main/jniLibs build --release
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable, List, Optional

from crossndk.build.collector import ArtifactCollector
from crossndk.build.orchestrator import BuildOrchestrator
from crossndk.cargo.invoker import CargoInvoker
from crossndk.cargo.metadata import cargo_target_dir
from crossndk.cargo.strip import NdkStripper
from crossndk.cli import utils
from crossndk.config.parser import load_config
from crossndk.config.resolver import resolve_targets
from crossndk.core.exceptions import (
    ArtifactError,
    BuildInvocationError,
    ConfigError,
    InvalidTargetError,
    NdkNotFoundError,
    TargetBuildFailure,
    TargetError,
)
from crossndk.cross.targets import Target
from crossndk.ndk.locator import NdkLocator
from crossndk.ndk.revision import read_revision

try:
    __version__ = version("crossndk")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _target_arg(value: str) -> Target:
    try:
        return Target.parse(value)
    except InvalidTargetError as e:
        raise argparse.ArgumentTypeError(str(e))


def _platform_arg(value: str) -> int:
    try:
        level = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid API level: {value!r}")
    if not 0 <= level <= 255:
        raise argparse.ArgumentTypeError(f"API level out of range (0-255): {level}")
    return level


class CLI:
    """crossndk command-line interface."""

    def __init__(
        self,
        locator: Optional[NdkLocator] = None,
        invoker=None,
        stripper=None,
        target_dir_resolver: Optional[Callable[[Path], Path]] = None,
    ):
        """
        Initialize CLI.

        Args:
            locator: NDK locator (defaults to the standard search order)
            invoker: Per-target build runner (defaults to CargoInvoker)
            stripper: Strip runner (defaults to NdkStripper)
            target_dir_resolver: Maps the manifest path to cargo's target
                directory (defaults to cargo_target_dir)
        """
        self.parser = self._create_parser()
        self.locator = locator
        self.invoker = invoker
        self.stripper = stripper
        self.target_dir_resolver = target_dir_resolver or cargo_target_dir

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="crossndk",
            usage="%(prog)s [OPTIONS] <CARGO_ARGS>...",
            description="crossndk - build Cargo projects for Android with the NDK",
            epilog=(
                "Environment: ANDROID_NDK_HOME, NDK_HOME, ANDROID_SDK_HOME\n"
                "Example: crossndk -t arm64-v8a -o jniLibs build --release"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"crossndk {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--target",
            "-t",
            action="append",
            default=[],
            type=_target_arg,
            metavar="TARGET",
            help="ABI or triple to build for (can be used multiple times)",
        )
        parser.add_argument(
            "--platform",
            "-p",
            type=_platform_arg,
            metavar="LEVEL",
            help="Platform (also known as API level)",
        )
        parser.add_argument(
            "--output-dir",
            "-o",
            type=Path,
            metavar="DIR",
            help="Output to a jniLibs directory in the correct sub-directories",
        )
        parser.add_argument(
            "--manifest-path",
            type=Path,
            metavar="PATH",
            help="Path to Cargo.toml (default: ./Cargo.toml)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help=(
                "YAML overlay for build defaults "
                "(default: crossndk.yaml next to Cargo.toml)"
            ),
        )
        parser.add_argument(
            "cargo_args",
            nargs=argparse.REMAINDER,
            metavar="CARGO_ARGS",
            help="Arguments to be passed to cargo",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code: 0 on success, the failing cargo exit code, or one of
            the utils.EXIT_* codes
        """
        argv = sys.argv[1:] if args is None else list(args)

        if not argv:
            self.parser.print_help()
            return utils.EXIT_SUCCESS

        parsed_args = self.parse_args(argv)
        self._configure_logging(parsed_args)
        logger.debug(f"Args: {argv}")

        if not parsed_args.cargo_args:
            self.parser.error("no cargo arguments given (e.g. 'build')")

        is_release = utils.is_release_build(argv)
        logger.debug(f"is_release: {is_release}")

        try:
            return self._build(parsed_args, is_release)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return utils.EXIT_INTERRUPTED
        except NdkNotFoundError:
            utils.log_ndk_not_found()
            return utils.EXIT_NDK_NOT_FOUND
        except (ConfigError, TargetError) as e:
            logger.error(f"{e}")
            return utils.EXIT_CONFIG_ERROR
        except TargetBuildFailure as e:
            logger.debug(f"{e}")
            return e.exit_code
        except BuildInvocationError as e:
            logger.error(f"{e}")
            return utils.EXIT_FAILURE
        except ArtifactError as e:
            logger.error(f"{e}")
            return utils.EXIT_ARTIFACT_ERROR
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return utils.EXIT_FAILURE

    def _build(self, args, is_release: bool) -> int:
        """
        Locate the NDK, build every target and collect the libraries.

        Returns:
            Exit code
        """
        locator = self.locator or NdkLocator()
        ndk_home = locator.locate()
        if ndk_home is None:
            raise NdkNotFoundError()
        logger.info(f"Using NDK at path: {ndk_home}")

        revision = read_revision(ndk_home)
        if revision is not None:
            logger.debug(f"NDK revision: {revision}")

        manifest_path = utils.resolve_manifest(args.manifest_path)
        project_dir = manifest_path.parent

        config = load_config(manifest_path, is_release, overlay_path=args.config)
        resolved = resolve_targets(args.target, args.platform, config)

        if args.output_dir is not None:
            try:
                utils.ensure_directory(args.output_dir, "output directory")
            except OSError as e:
                raise ArtifactError(str(e))

        logger.info(f"NDK API level: {resolved.platform}")
        logger.info(f"Building targets: {utils.format_target_list(resolved.targets)}")

        target_dir = None
        if args.output_dir is not None:
            target_dir = self.target_dir_resolver(manifest_path)

        orchestrator = BuildOrchestrator(self.invoker or CargoInvoker())
        result = orchestrator.run(
            resolved.targets,
            ndk_home,
            resolved.platform,
            args.cargo_args,
            project_dir,
            target_dir=target_dir,
            is_release=is_release,
        )
        if not result.ok:
            raise TargetBuildFailure(result.failure.target, result.exit_code)

        if args.output_dir is not None:
            logger.info(f"Copying libraries to {args.output_dir}...")
            collector = ArtifactCollector(ndk_home, self.stripper or NdkStripper())
            collector.collect(result.outcomes, args.output_dir)

        return utils.EXIT_SUCCESS

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
