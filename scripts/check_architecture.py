#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    package = ROOT / "src/aab2apk"

    _assert_no_imports(
        package / "cli/cli.py",
        [
            "import subprocess",
            "from aab2apk.infrastructure",
            "from aab2apk.adapters",
        ],
    )

    for path in (package / "application").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "import typer",
                "from typer",
                "import subprocess",
            ],
        )

    for layer in ("infrastructure", "adapters"):
        for path in (package / layer).glob("*.py"):
            _assert_no_imports(
                path,
                [
                    "import typer",
                    "from aab2apk.application.use_cases",
                    "from aab2apk.cli",
                ],
            )

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
