"""Platform-specific discovery of Java, bundletool and apksigner."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from aab2apk.application.ports import Environment

logger = logging.getLogger(__name__)

BUNDLETOOL_JAR = "bundletool.jar"


def _first_existing(candidates: Iterable[Path]) -> Path | None:
    for candidate in candidates:
        try:
            if candidate.is_file():
                return candidate
        except OSError:
            continue
    return None


class BaseToolLocator:
    """Search order shared by all platforms.

    Subclasses provide executable names and conventional install
    directories; lookups never raise and report absence as ``None``.
    """

    java_executable = "java"
    apksigner_executable = "apksigner"

    def __init__(self, env: Environment) -> None:
        self.env = env

    def conventional_bundletool_paths(self) -> list[Path]:
        """Return platform install locations for ``bundletool.jar``."""
        return []

    def _on_path(self, name: str) -> list[Path]:
        return [Path(entry) / name for entry in self.env.path_entries()]

    def _bundletool_candidates(self) -> Iterator[Path]:
        cwd = self.env.cwd()
        yield cwd / BUNDLETOOL_JAR
        yield cwd / "bundletool" / BUNDLETOOL_JAR
        yield from self.conventional_bundletool_paths()
        yield from self._on_path(BUNDLETOOL_JAR)

    def _java_candidates(self) -> Iterator[Path]:
        yield self.env.cwd() / self.java_executable
        java_home = self.env.get("JAVA_HOME")
        if java_home:
            yield Path(java_home) / "bin" / self.java_executable
        yield from self._on_path(self.java_executable)

    def find_bundletool(self) -> Path | None:
        """Find ``bundletool.jar``: cwd, conventional locations, then PATH."""
        found = _first_existing(self._bundletool_candidates())
        logger.debug("bundletool lookup: %s", found)
        return found

    def find_java_executable(self) -> Path | None:
        """Find java: cwd, ``$JAVA_HOME/bin``, then PATH."""
        found = _first_existing(self._java_candidates())
        logger.debug("java lookup: %s", found)
        return found

    def find_apksigner(self) -> Path | None:
        """Find apksigner in the newest SDK build-tools, then on PATH."""
        sdk_root = self.env.get("ANDROID_HOME") or self.env.get("ANDROID_SDK_ROOT")
        if sdk_root:
            found = self._newest_build_tools_signer(Path(sdk_root) / "build-tools")
            if found is not None:
                return found
        found = _first_existing(self._on_path(self.apksigner_executable))
        logger.debug("apksigner lookup: %s", found)
        return found

    def _newest_build_tools_signer(self, build_tools: Path) -> Path | None:
        try:
            versions = [entry for entry in build_tools.iterdir() if entry.is_dir()]
        except OSError:
            return None
        # lexicographic order of version directory names, as the SDK layout has it
        for version_dir in sorted(versions, key=lambda entry: entry.name, reverse=True):
            signer = version_dir / "lib" / self.apksigner_executable
            if signer.is_file():
                return signer
        return None


class PosixToolLocator(BaseToolLocator):
    """Tool discovery for Linux and macOS."""

    def conventional_bundletool_paths(self) -> list[Path]:
        """Return home-relative and global install locations."""
        paths: list[Path] = []
        home = self.env.get("HOME")
        if home:
            paths.append(Path(home) / ".local" / "bin" / BUNDLETOOL_JAR)
            paths.append(Path(home) / ".bundletool" / BUNDLETOOL_JAR)
        paths.append(Path("/usr/local/bin") / BUNDLETOOL_JAR)
        paths.append(Path("/opt/bundletool") / BUNDLETOOL_JAR)
        return paths


class WindowsToolLocator(BaseToolLocator):
    """Tool discovery for Windows."""

    java_executable = "java.exe"
    apksigner_executable = "apksigner.bat"

    def conventional_bundletool_paths(self) -> list[Path]:
        """Return local and roaming application-data locations."""
        paths: list[Path] = []
        for name in ("LOCALAPPDATA", "APPDATA"):
            value = self.env.get(name)
            if value:
                paths.append(Path(value) / "bundletool" / BUNDLETOOL_JAR)
        return paths


def create_tool_locator(env: Environment) -> BaseToolLocator:
    """Return the locator matching the host platform."""
    if env.is_windows:
        return WindowsToolLocator(env)
    return PosixToolLocator(env)
