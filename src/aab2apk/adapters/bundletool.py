"""Bundletool invocation implementing the ``build-apks`` contract."""

from __future__ import annotations

import logging
from pathlib import Path

from aab2apk.application.ports import ProcessRunner
from aab2apk.application.results import ProcessResult
from aab2apk.infrastructure.filesystem import get_absolute_path
from aab2apk.types import BUNDLETOOL_MODES, OutputMode

logger = logging.getLogger(__name__)


def build_apks_args(bundle: Path, output: Path, mode: OutputMode) -> list[str]:
    """Return bundletool arguments producing an ``.apks`` archive.

    Parameters
    ----------
    bundle : Path
        Input ``.aab``; passed as an absolute path.
    output : Path
        Destination ``.apks`` archive.
    mode : {"universal", "split"}
        Requested output mode; ``split`` maps to bundletool's ``default``.

    Returns
    -------
    list[str]
        Argument vector following ``java -jar bundletool.jar``.
    """
    return [
        "build-apks",
        f"--bundle={get_absolute_path(bundle)}",
        f"--output={output}",
        f"--mode={BUNDLETOOL_MODES[mode]}",
    ]


class BundletoolAdapter:
    """Run bundletool through a Java runtime."""

    def __init__(self, runner: ProcessRunner, java_path: Path, jar_path: Path) -> None:
        self.runner = runner
        self.java_path = java_path
        self.jar_path = jar_path

    def build_apks(
        self,
        bundle: Path,
        output: Path,
        mode: OutputMode,
        working_dir: Path,
    ) -> ProcessResult:
        """Generate ``output`` from ``bundle`` in the requested mode."""
        args = build_apks_args(bundle, output, mode)
        logger.debug("bundletool %s", " ".join(args))
        return self.runner.run_java(
            str(self.java_path),
            str(self.jar_path),
            args,
            working_dir=working_dir,
        )
