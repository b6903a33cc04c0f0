"""Environment accessors used for tool discovery and temp-dir naming."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable, Mapping
from pathlib import Path


def split_path_list(value: str | None, is_windows: bool) -> list[str]:
    """Split a PATH-style value on the platform delimiter.

    Parameters
    ----------
    value : str | None
        Raw PATH value.
    is_windows : bool
        Use ``;`` instead of ``:`` as delimiter.

    Returns
    -------
    list[str]
        Non-empty directory entries in their original order.
    """
    if not value:
        return []
    delimiter = ";" if is_windows else ":"
    return [entry for entry in value.split(delimiter) if entry]


class ProcessEnvironment:
    """Environment backed by the running interpreter process."""

    def __init__(self) -> None:
        self.is_windows = sys.platform.startswith("win")

    def get(self, name: str) -> str | None:
        """Return an environment variable or ``None``."""
        return os.environ.get(name)

    def cwd(self) -> Path:
        """Return the current working directory."""
        return Path.cwd()

    def path_entries(self) -> list[str]:
        """Return PATH split on the platform delimiter."""
        return split_path_list(self.get("PATH"), self.is_windows)

    def pid(self) -> int:
        """Return the current process identifier."""
        return os.getpid()

    def now(self) -> float:
        """Return the current Unix timestamp."""
        return time.time()


class MappingEnvironment:
    """Environment with explicitly injected values.

    Tool discovery reads HOME, APPDATA, JAVA_HOME, ANDROID_HOME and PATH;
    injecting them here keeps lookups independent of the real process
    environment.
    """

    def __init__(
        self,
        variables: Mapping[str, str] | None = None,
        *,
        cwd: Path | None = None,
        is_windows: bool = False,
        pid: int = 4242,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._variables = dict(variables or {})
        self._cwd = cwd or Path.cwd()
        self.is_windows = is_windows
        self._pid = pid
        self._clock = clock or time.time

    def get(self, name: str) -> str | None:
        """Return an injected variable or ``None``."""
        return self._variables.get(name)

    def cwd(self) -> Path:
        """Return the injected working directory."""
        return self._cwd

    def path_entries(self) -> list[str]:
        """Return the injected PATH split on the platform delimiter."""
        return split_path_list(self.get("PATH"), self.is_windows)

    def pid(self) -> int:
        """Return the injected process identifier."""
        return self._pid

    def now(self) -> float:
        """Return the injected clock value."""
        return self._clock()
