"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from aab2apk.application.results import ProcessResult
from aab2apk.schemas import SigningConfig


class Environment(Protocol):
    """Read-only view of process-global state used by tool discovery."""

    is_windows: bool

    def get(self, name: str) -> str | None:
        """Return an environment variable or ``None``."""

    def cwd(self) -> Path:
        """Return the current working directory."""

    def path_entries(self) -> list[str]:
        """Return PATH split on the platform delimiter."""

    def pid(self) -> int:
        """Return the current process identifier."""

    def now(self) -> float:
        """Return the current Unix timestamp."""


class ProcessRunner(Protocol):
    """Run external executables synchronously."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        working_dir: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        """Run command and capture its output; never raise."""

    def run_java(
        self,
        java_path: str,
        jar_path: str,
        java_args: Sequence[str],
        working_dir: Path | None = None,
    ) -> ProcessResult:
        """Run ``java -jar <jar_path> <java_args>``."""


class ToolLocator(Protocol):
    """Find external tools on the host."""

    def find_bundletool(self) -> Path | None:
        """Return bundletool jar path if found."""

    def find_java_executable(self) -> Path | None:
        """Return java executable path if found."""

    def find_apksigner(self) -> Path | None:
        """Return apksigner executable path if found."""


class ArchiveExtractor(Protocol):
    """Unpack a ZIP archive into a directory."""

    def extract(
        self, archive: Path, destination: Path, working_dir: Path
    ) -> ProcessResult:
        """Extract archive; failure is reported through the result."""


class ApkSigner(Protocol):
    """Sign APK files in place."""

    def sign_apk(self, apk_path: Path, signing: SigningConfig) -> bool:
        """Sign one APK."""

    def sign_apks(self, target: Path, signing: SigningConfig) -> bool:
        """Sign every APK in a directory."""
