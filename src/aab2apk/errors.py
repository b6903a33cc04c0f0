"""Exception taxonomy for bundle conversion failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aab2apk.application.results import ProcessResult


class Aab2ApkError(Exception):
    """Base error for all conversion failures.

    Attributes
    ----------
    exit_code : int
        Process exit status the CLI reports for this error.
    """

    exit_code: int = 1


class PreconditionError(Aab2ApkError):
    """Invalid input bundle, keystore, or signing parameters."""

    exit_code = 2


class ToolNotFoundError(Aab2ApkError):
    """Bundletool, Java runtime, or signer could not be located."""

    exit_code = 3


class ConversionError(Aab2ApkError):
    """A conversion step failed after preconditions were satisfied."""


class ToolExecutionError(ConversionError):
    """An external tool exited with a non-zero status."""

    def __init__(self, message: str, result: ProcessResult | None = None) -> None:
        detail = message
        if result is not None and result.stderr.strip():
            detail = f"{message}\n{result.stderr.strip()}"
        super().__init__(detail)
        self.result = result


class TempDirectoryError(ConversionError):
    """The scratch directory for a conversion could not be created."""


class OutputError(ConversionError):
    """Output directory creation or APK relocation failed."""


class SigningError(ConversionError):
    """The signer reported failure for at least one APK."""
