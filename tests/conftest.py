"""Shared pytest configuration, marker assignment and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from helpers import write_zip

from aab2apk.application.options import ToolPaths
from aab2apk.infrastructure.environment import MappingEnvironment


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Directory used as TMPDIR by the injected environment."""
    root = tmp_path / "tmp"
    root.mkdir()
    return root


@pytest.fixture
def environment(tmp_path: Path, temp_root: Path) -> MappingEnvironment:
    """POSIX environment rooted in ``tmp_path``."""
    return MappingEnvironment(
        {"TMPDIR": str(temp_root), "HOME": str(tmp_path / "home"), "PATH": ""},
        cwd=tmp_path,
        clock=lambda: 1_700_000_000.0,
    )


@pytest.fixture
def aab_file(tmp_path: Path) -> Path:
    """Minimal ZIP-based ``app.aab``."""
    return write_zip(
        tmp_path / "app.aab",
        {"BundleConfig.pb": b"config", "base/manifest/AndroidManifest.xml": b"m"},
    )


@pytest.fixture
def tools(tmp_path: Path) -> ToolPaths:
    """Placeholder java and bundletool files."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    java = bin_dir / "java"
    java.write_text("#!/bin/sh\n")
    jar = bin_dir / "bundletool.jar"
    jar.write_bytes(b"PK\x03\x04")
    return ToolPaths(java=java, bundletool=jar)


@pytest.fixture
def keystore(tmp_path: Path) -> Path:
    """Non-empty keystore placeholder."""
    path = tmp_path / "release.jks"
    path.write_bytes(b"\xfe\xed\xfe\xed")
    return path


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo ``logging.basicConfig(force=True)`` performed by CLI commands."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
