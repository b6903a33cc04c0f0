"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

INTERMEDIATE_ARCHIVE = "output.apks"
EXTRACTION_DIR = "extracted"


@dataclass(frozen=True)
class ToolPaths:
    """Resolved locations of the tools a conversion needs."""

    java: Path
    bundletool: Path
