"""Test doubles and archive builders shared across suites."""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TypeAlias

from aab2apk.application.results import ProcessResult

RunHandler: TypeAlias = Callable[[str, list[str], Path | None], ProcessResult]


def write_zip(path: Path, entries: Mapping[str, bytes]) -> Path:
    """Write a ZIP archive with the given member names and contents."""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return path


class FakeRunner:
    """Process runner test double recording every invocation."""

    def __init__(self, handler: RunHandler | None = None) -> None:
        self.handler = handler
        self.calls: list[tuple[str, list[str], Path | None]] = []

    def run(
        self,
        command: str,
        args: Sequence[str],
        working_dir: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        del env
        call = (command, list(args), working_dir)
        self.calls.append(call)
        if self.handler is None:
            return ProcessResult(exit_code=0)
        return self.handler(*call)

    def run_java(
        self,
        java_path: str,
        jar_path: str,
        java_args: Sequence[str],
        working_dir: Path | None = None,
    ) -> ProcessResult:
        return self.run(java_path, ["-jar", jar_path, *java_args], working_dir=working_dir)


def bundletool_handler(
    entries: Mapping[str, bytes],
    *,
    exit_code: int = 0,
    stderr: str = "",
    write_archive: bool = True,
) -> RunHandler:
    """Emulate ``bundletool build-apks`` writing ``entries`` to ``--output``."""

    def handler(command: str, args: list[str], working_dir: Path | None) -> ProcessResult:
        del command, working_dir
        if exit_code == 0 and write_archive:
            output = next(arg for arg in args if arg.startswith("--output="))
            write_zip(Path(output.split("=", 1)[1]), entries)
        return ProcessResult(exit_code=exit_code, stderr=stderr)

    return handler


class FakeSigner:
    """Signer test double recording calls."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.single: list[Path] = []
        self.directories: list[Path] = []

    def sign_apk(self, apk_path: Path, signing: object) -> bool:
        del signing
        self.single.append(apk_path)
        return self.result

    def sign_apks(self, target: Path, signing: object) -> bool:
        del signing
        self.directories.append(target)
        return self.result
