"""Shared type aliases for conversion modules."""

from __future__ import annotations

import os
from typing import Literal, TypeAlias

OutputMode: TypeAlias = Literal["universal", "split"]
PathLike: TypeAlias = str | os.PathLike[str]

OUTPUT_MODES: tuple[OutputMode, ...] = ("universal", "split")

# bundletool --mode value for each output mode
BUNDLETOOL_MODES: dict[OutputMode, str] = {
    "universal": "universal",
    "split": "default",
}
