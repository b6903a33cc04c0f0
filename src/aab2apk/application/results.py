"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from aab2apk.types import OutputMode

PROCESS_START_FAILED = -1


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of one external process invocation."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        """Return ``True`` when the process exited with status zero."""
        return self.exit_code == 0


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome."""

    output_dir: Path
    mode: OutputMode
    apk_paths: tuple[Path, ...]
    signed: bool = False
    elapsed_seconds: float | None = None


@dataclass(frozen=True)
class ToolReport:
    """Tools detected on the current host."""

    java: Path | None = None
    bundletool: Path | None = None
    apksigner: Path | None = None

    def as_dict(self) -> dict[str, str | None]:
        """Return tool paths keyed by tool name."""
        return {
            "java": str(self.java) if self.java else None,
            "bundletool": str(self.bundletool) if self.bundletool else None,
            "apksigner": str(self.apksigner) if self.apksigner else None,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Resolved configuration after a successful pre-flight check."""

    input_aab: Path
    java: Path
    bundletool: Path
    keystore: Path | None = None

    @property
    def signing_enabled(self) -> bool:
        """Return whether the conversion would sign its output."""
        return self.keystore is not None
