"""
crossndk/ndk/locator.py

Android NDK discovery - finds an NDK installation on the host.

Discovery runs an ordered list of searchers. Each searcher is a pure function
of an environment snapshot and a filesystem view, so tests can drive it
without touching the real process environment. The first searcher that
returns a path wins; later searchers are not consulted.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from ..core.platform import HostInfo, detect_host

logger = logging.getLogger(__name__)


class FileSystem:
    """Read-only filesystem queries used by the searchers."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_dir(self, path: Path) -> List[Path]:
        """List immediate children; unreadable directories yield nothing."""
        try:
            return list(path.iterdir())
        except OSError as e:
            logger.debug(f"Could not list {path}: {e}")
            return []


class NdkSearcher(ABC):
    """
    A single NDK discovery strategy.

    Subclasses return a candidate NDK root or None. They must not raise.
    """

    #: Short label used in log messages
    source = "unknown"

    @abstractmethod
    def search(self, environ: Mapping[str, str], fs: FileSystem) -> Optional[Path]:
        """
        Look for an NDK.

        Args:
            environ: Environment snapshot
            fs: Filesystem view

        Returns:
            NDK root path or None
        """
        pass


class EnvVarSearcher(NdkSearcher):
    """
    Take the NDK root verbatim from an environment variable.

    The path is trusted as given; its existence is not checked.
    """

    def __init__(self, variable: str):
        self.variable = variable
        self.source = variable

    def search(self, environ: Mapping[str, str], fs: FileSystem) -> Optional[Path]:
        value = environ.get(self.variable)
        if not value:
            logger.debug(f"{self.variable} is not set")
            return None
        return Path(value)


class SdkBundleSearcher(NdkSearcher):
    """
    Look for the legacy ``ndk-bundle`` directory inside an Android SDK.

    Unlike the direct variables, the resulting path must exist.
    """

    def __init__(self, variable: str = "ANDROID_SDK_HOME", subdir: str = "ndk-bundle"):
        self.variable = variable
        self.subdir = subdir
        self.source = f"{variable}/{subdir}"

    def search(self, environ: Mapping[str, str], fs: FileSystem) -> Optional[Path]:
        sdk_home = environ.get(self.variable)
        if not sdk_home:
            logger.debug(f"{self.variable} is not set")
            return None

        path = Path(sdk_home) / self.subdir
        if fs.exists(path):
            return path

        logger.debug(f"SDK NDK bundle does not exist: {path}")
        return None


class AndroidStudioSearcher(NdkSearcher):
    """
    Look in the side-by-side NDK directory Android Studio installs into.

    Installed NDKs live in ``<user data dir>/Android/sdk/ndk/<version>``. The
    children are sorted by name and the greatest one is picked. The order is
    lexicographic, not by version: '9.0.0' sorts above '23.1.1'.
    """

    source = "Android Studio"

    def __init__(self, host: Optional[HostInfo] = None):
        self.host = host

    def ndk_dir(self, environ: Mapping[str, str]) -> Path:
        host = self.host or detect_host()
        return host.user_data_dir(environ) / "Android" / "sdk" / "ndk"

    def search(self, environ: Mapping[str, str], fs: FileSystem) -> Optional[Path]:
        try:
            ndk_dir = self.ndk_dir(environ)
        except RuntimeError as e:
            logger.debug(f"Skipping Android Studio NDK lookup: {e}")
            return None

        if not fs.exists(ndk_dir):
            logger.debug(f"Android Studio NDK directory does not exist: {ndk_dir}")
            return None

        paths = sorted(fs.list_dir(ndk_dir))
        paths.reverse()
        if not paths:
            logger.debug(f"No NDK versions installed in {ndk_dir}")
            return None

        return paths[0]


def default_searchers(host: Optional[HostInfo] = None) -> List[NdkSearcher]:
    """
    Get the standard searchers in priority order.

    1. ANDROID_NDK_HOME (trusted)
    2. NDK_HOME, the legacy alias (trusted)
    3. $ANDROID_SDK_HOME/ndk-bundle (must exist)
    4. Newest entry of the Android Studio NDK directory
    """
    return [
        EnvVarSearcher("ANDROID_NDK_HOME"),
        EnvVarSearcher("NDK_HOME"),
        SdkBundleSearcher(),
        AndroidStudioSearcher(host),
    ]


class NdkLocator:
    """
    Locates the Android NDK.

    Example:
        >>> locator = NdkLocator(environ={"ANDROID_NDK_HOME": "/opt/ndk"})
        >>> locator.locate()
        PosixPath('/opt/ndk')
    """

    def __init__(
        self,
        searchers: Optional[Sequence[NdkSearcher]] = None,
        environ: Optional[Mapping[str, str]] = None,
        fs: Optional[FileSystem] = None,
        host: Optional[HostInfo] = None,
    ):
        """
        Initialize locator.

        Args:
            searchers: Strategies in priority order (defaults to default_searchers())
            environ: Environment snapshot (defaults to a copy of os.environ)
            fs: Filesystem view (defaults to the real filesystem)
            host: Host information for the Android Studio searcher
        """
        self.searchers = (
            list(searchers) if searchers is not None else default_searchers(host)
        )
        self.environ = dict(os.environ) if environ is None else environ
        self.fs = fs or FileSystem()

    def locate(self) -> Optional[Path]:
        """
        Run the searchers in order and return the first hit.

        Returns:
            NDK root path, or None if no searcher found one
        """
        for searcher in self.searchers:
            path = searcher.search(self.environ, self.fs)
            if path is not None:
                logger.debug(f"Found NDK via {searcher.source}: {path}")
                return path

        logger.debug("No NDK found by any searcher")
        return None
