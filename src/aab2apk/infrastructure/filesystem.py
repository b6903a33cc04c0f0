"""Filesystem helpers for bundle validation and scratch directories."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from aab2apk.application.ports import Environment
from aab2apk.errors import OutputError, TempDirectoryError
from aab2apk.types import PathLike

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK"
TEMP_DIR_PREFIX = "aab2apk_"


def file_exists(path: PathLike) -> bool:
    """Return whether anything exists at ``path``."""
    return Path(path).exists()


def is_regular_file(path: PathLike) -> bool:
    """Return whether ``path`` is a regular file."""
    return Path(path).is_file()


def is_directory(path: PathLike) -> bool:
    """Return whether ``path`` is a directory."""
    return Path(path).is_dir()


def create_directories(path: PathLike) -> bool:
    """Create ``path`` and its parents.

    Returns ``True`` when the directory exists afterwards, including when it
    already existed; ``False`` on an OS-level error.
    """
    target = Path(path)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("mkdir failed for %s: %s", target, exc)
        return False
    return True


def get_absolute_path(path: PathLike) -> str:
    """Return the absolute form of ``path``, or ``path`` itself on failure."""
    try:
        return str(Path(path).absolute())
    except OSError:
        return str(path)


def validate_aab_file(path: PathLike) -> bool:
    """Shallow App Bundle check: ``.aab`` regular file starting with ``PK``."""
    candidate = Path(path)
    if not candidate.is_file():
        return False
    if candidate.suffix != ".aab":
        return False
    try:
        with candidate.open("rb") as handle:
            header = handle.read(len(ZIP_MAGIC))
    except OSError:
        return False
    return header == ZIP_MAGIC


def validate_keystore_file(path: PathLike) -> bool:
    """Shallow keystore check: regular, non-empty file."""
    candidate = Path(path)
    if not candidate.is_file():
        return False
    try:
        return candidate.stat().st_size > 0
    except OSError:
        return False


def get_temp_root(env: Environment) -> Path:
    """Return the conventional temp root for the host platform."""
    if env.is_windows:
        for name in ("TEMP", "TMP"):
            value = env.get(name)
            if value:
                return Path(value)
        return Path("C:\\Temp")
    for name in ("TMPDIR", "TMP"):
        value = env.get(name)
        if value:
            return Path(value)
    return Path("/tmp")


def create_temp_directory(env: Environment) -> Path:
    """Create ``<temp root>/aab2apk_<pid>_<timestamp>``.

    Raises
    ------
    TempDirectoryError
        If the directory cannot be created.
    """
    name = f"{TEMP_DIR_PREFIX}{env.pid()}_{int(env.now())}"
    temp_dir = get_temp_root(env) / name
    if not create_directories(temp_dir):
        raise TempDirectoryError(f"Failed to create temporary directory: {temp_dir}")
    logger.debug("created temp directory %s", temp_dir)
    return temp_dir


def remove_temp_directory(path: PathLike) -> None:
    """Recursively delete ``path``; errors are ignored."""
    target = Path(path)
    try:
        if target.exists():
            shutil.rmtree(target)
    except OSError as exc:
        logger.debug("ignoring temp cleanup failure for %s: %s", target, exc)


@contextmanager
def scoped_temp_directory(env: Environment) -> Iterator[Path]:
    """Yield a fresh temp directory that is removed on every exit path."""
    temp_dir = create_temp_directory(env)
    try:
        yield temp_dir
    finally:
        remove_temp_directory(temp_dir)


def move_file(source: Path, destination: Path) -> None:
    """Move ``source`` to ``destination``, copying across filesystems.

    Raises
    ------
    OutputError
        If neither rename nor copy+delete succeeds.
    """
    try:
        source.replace(destination)
        return
    except OSError:
        pass
    try:
        shutil.copyfile(source, destination)
        source.unlink()
    except OSError as exc:
        raise OutputError(
            f"Failed to move APK to output directory: {exc}"
        ) from exc


def iter_apks(root: Path) -> Iterator[Path]:
    """Yield regular ``*.apk`` files under ``root`` in sorted order."""
    for candidate in sorted(root.rglob("*.apk")):
        if candidate.is_file():
            yield candidate
