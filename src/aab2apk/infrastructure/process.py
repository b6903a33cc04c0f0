"""Synchronous external process invocation."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from aab2apk.application.results import PROCESS_START_FAILED, ProcessResult

logger = logging.getLogger(__name__)

_SECRET_PREFIX = "pass:"


def redact_argument(arg: str) -> str:
    """Hide password material passed as ``pass:<secret>``."""
    if arg.startswith(_SECRET_PREFIX):
        return f"{_SECRET_PREFIX}***"
    return arg


def format_command(command: str, args: Sequence[str]) -> str:
    """Render a shell-quoted, password-redacted command line for logs."""
    return shlex.join([command, *(redact_argument(arg) for arg in args)])


class SubprocessRunner:
    """Run external executables and capture their output."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        working_dir: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        """Run ``command`` with a literal argument vector.

        Parameters
        ----------
        command : str
            Executable to run.
        args : Sequence[str]
            Arguments passed without shell re-parsing.
        working_dir : Path | None, default=None
            Working directory for the child process.
        env : Mapping[str, str] | None, default=None
            Extra variables layered over the current environment.

        Returns
        -------
        ProcessResult
            Exit code with captured stdout/stderr. A process that cannot be
            started is reported with exit code ``-1``.
        """
        logger.debug("run: %s (cwd=%s)", format_command(command, args), working_dir)
        child_env = None
        if env is not None:
            child_env = {**os.environ, **env}
        try:
            completed = subprocess.run(
                [command, *args],
                cwd=str(working_dir) if working_dir is not None else None,
                env=child_env,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except (OSError, ValueError) as exc:
            logger.debug("process start failed for %s: %s", command, exc)
            return ProcessResult(
                exit_code=PROCESS_START_FAILED,
                stdout="",
                stderr=f"Failed to create process: {exc}",
            )

        logger.debug("exit %d: %s", completed.returncode, command)
        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def run_java(
        self,
        java_path: str,
        jar_path: str,
        java_args: Sequence[str],
        working_dir: Path | None = None,
    ) -> ProcessResult:
        """Run ``java -jar <jar_path> <java_args>``."""
        return self.run(java_path, ["-jar", jar_path, *java_args], working_dir=working_dir)
