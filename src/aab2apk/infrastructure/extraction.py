"""ZIP extraction of bundletool's intermediate ``.apks`` archive."""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path

from aab2apk.application.ports import Environment, ProcessRunner
from aab2apk.application.results import ProcessResult

logger = logging.getLogger(__name__)


class UnzipExtractor:
    """Extract with the ``unzip`` utility."""

    def __init__(self, runner: ProcessRunner, executable: str = "unzip") -> None:
        self.runner = runner
        self.executable = executable

    def extract(
        self, archive: Path, destination: Path, working_dir: Path
    ) -> ProcessResult:
        """Run ``unzip -q <archive> -d <destination>``."""
        return self.runner.run(
            self.executable,
            ["-q", str(archive), "-d", str(destination)],
            working_dir=working_dir,
        )


class PowerShellExtractor:
    """Extract with PowerShell ``Expand-Archive``.

    ``Expand-Archive`` refuses archives without a ``.zip`` suffix, so the
    archive is copied next to it first and the copy removed afterwards.
    """

    def __init__(self, runner: ProcessRunner, executable: str = "powershell.exe") -> None:
        self.runner = runner
        self.executable = executable

    def extract(
        self, archive: Path, destination: Path, working_dir: Path
    ) -> ProcessResult:
        """Copy to ``output.zip`` and expand it into ``destination``."""
        zip_copy = working_dir / "output.zip"
        try:
            shutil.copyfile(archive, zip_copy)
        except OSError as exc:
            return ProcessResult(
                exit_code=1, stderr=f"Failed to copy .apks file: {exc}"
            )
        try:
            return self.runner.run(
                self.executable,
                [
                    "-Command",
                    f'Expand-Archive -Path "{zip_copy}" '
                    f'-DestinationPath "{destination}" -Force',
                ],
                working_dir=working_dir,
            )
        finally:
            try:
                zip_copy.unlink()
            except OSError:
                logger.debug("could not remove %s", zip_copy)


class ZipfileExtractor:
    """Extract in-process with :mod:`zipfile`."""

    def extract(
        self, archive: Path, destination: Path, working_dir: Path
    ) -> ProcessResult:
        """Extract every member, refusing entries outside ``destination``."""
        del working_dir
        root = destination.resolve()
        try:
            with zipfile.ZipFile(archive) as bundle:
                for member in bundle.infolist():
                    target = (root / member.filename).resolve()
                    if not target.is_relative_to(root):
                        return ProcessResult(
                            exit_code=1,
                            stderr=f"Refusing to extract entry outside destination: {member.filename}",
                        )
                bundle.extractall(root)
        except (zipfile.BadZipFile, OSError) as exc:
            return ProcessResult(exit_code=1, stderr=f"Failed to extract {archive}: {exc}")
        return ProcessResult(exit_code=0)


def create_extractor(
    env: Environment, runner: ProcessRunner
) -> UnzipExtractor | PowerShellExtractor | ZipfileExtractor:
    """Select the extractor for the host platform.

    Windows uses PowerShell; elsewhere ``unzip`` is used when it is on PATH
    and :mod:`zipfile` otherwise.
    """
    if env.is_windows:
        return PowerShellExtractor(runner)
    for entry in env.path_entries():
        candidate = Path(entry) / "unzip"
        if candidate.is_file():
            return UnzipExtractor(runner, executable=str(candidate))
    logger.debug("unzip not found on PATH; using in-process extraction")
    return ZipfileExtractor()
