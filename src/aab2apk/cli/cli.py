#!/usr/bin/env python3
"""
aab2apk.cli.cli

Typer-based CLI for converting Android App Bundles into APKs.

The heavy lifting is done by external tools: bundletool (run through a Java
runtime) generates the APKs and apksigner signs them. This CLI validates
inputs, locates those tools and arranges their output.

Examples
--------
Universal APK into ./dist:

    aab2apk convert app.aab

Split APKs, signed with a password read from the environment:

    aab2apk convert app.aab -o out --mode split \\
        --keystore release.jks --ks-pass env:KS_PASS --key-alias release
"""

from __future__ import annotations

import json
import logging
import time
import traceback
from pathlib import Path
from typing import Any

import typer

from aab2apk import __version__

app = typer.Typer(
    name="aab2apk",
    help="Convert Android App Bundles (.aab) to APK files.",
    no_args_is_help=True,
)

KEYSTORE_HELP = "Keystore file path for signing."
KS_PASS_HELP = "Keystore password (or env:VAR_NAME)."
KEY_ALIAS_HELP = "Key alias."
KEY_PASS_HELP = "Key password (or env:VAR_NAME). Defaults to the keystore password."
BUNDLETOOL_HELP = "Path to bundletool.jar (auto-detected if not specified)."
JAVA_HELP = "Path to java executable (auto-detected if not specified)."
JSON_HELP = "Print a JSON result instead of human-readable output."

LOG_FORMAT = "%(message)s"
VERBOSE_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


# -----------------------------
# Output helpers
# -----------------------------
def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library logging to stderr at the requested verbosity.

    Parameters
    ----------
    verbose : bool
        Show debug output including tool command lines.
    quiet : bool
        Only show warnings and errors. Takes precedence over ``verbose``.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format=VERBOSE_LOG_FORMAT if verbose and not quiet else LOG_FORMAT,
        force=True,
    )


def _echo_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _fail(exc: Exception, debug: bool, json_output: bool, **extra: Any) -> typer.Exit:
    """Report ``exc`` and build the matching ``typer.Exit``."""
    if json_output:
        _echo_json({"status": "failure", "error": str(exc), **extra})
        code = getattr(exc, "exit_code", 1)
        return typer.Exit(code=code if isinstance(code, int) and code > 0 else 1)
    return typer.Exit(code=_print_error(exc, debug))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"aab2apk version {__version__}")
        raise typer.Exit()


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information.",
    ),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    """
    del version
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_aab: Path = typer.Argument(..., help="Input .aab file path."),
    output_dir: Path = typer.Option(
        Path("./dist"), "--output", "-o", help="Output directory."
    ),
    mode: str = typer.Option(
        "universal", "--mode", "-m", help="Output mode: universal or split."
    ),
    keystore: Path | None = typer.Option(None, "--keystore", help=KEYSTORE_HELP),
    ks_pass: str | None = typer.Option(None, "--ks-pass", help=KS_PASS_HELP),
    key_alias: str | None = typer.Option(None, "--key-alias", help=KEY_ALIAS_HELP),
    key_pass: str | None = typer.Option(None, "--key-pass", help=KEY_PASS_HELP),
    bundletool: Path | None = typer.Option(None, "--bundletool", help=BUNDLETOOL_HELP),
    java: Path | None = typer.Option(None, "--java", help=JAVA_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet mode (errors only)."),
    json_output: bool = typer.Option(False, "--json", help=JSON_HELP),
    timing: bool = typer.Option(False, "--timing", help="Show elapsed conversion time."),
) -> None:
    """Convert an App Bundle to a universal APK or split APKs.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_aab : Path
        Bundle to convert.
    output_dir : Path
        Directory that receives the APKs.
    mode : str
        ``universal`` for one APK, ``split`` for base plus config splits.

    Notes
    -----
    - Signing runs when any signing option is given; it requires apksigner
      from Android SDK Build Tools (``ANDROID_HOME`` or PATH).
    - ``--json`` implies ``--quiet``.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    quiet = quiet or json_output
    _configure_logging(verbose, quiet)

    started = time.perf_counter()
    try:
        from aab2apk.api import convert_aab_file

        kwargs: dict[str, Any] = {
            "input_aab": input_aab,
            "output_dir": output_dir,
            "mode": mode,
        }
        if keystore is not None:
            kwargs["keystore"] = keystore
        if ks_pass is not None:
            kwargs["keystore_password"] = ks_pass
        if key_alias is not None:
            kwargs["key_alias"] = key_alias
        if key_pass is not None:
            kwargs["key_password"] = key_pass
        if bundletool is not None:
            kwargs["bundletool_path"] = bundletool
        if java is not None:
            kwargs["java_path"] = java

        result = convert_aab_file(**kwargs)
    except Exception as exc:
        # unexpected crashes get the same clean message; --debug adds the traceback
        elapsed = round(time.perf_counter() - started, 3)
        raise _fail(exc, debug, json_output, execution_time=elapsed)

    elapsed = time.perf_counter() - started
    if json_output:
        _echo_json(
            {
                "status": "success",
                "execution_time": round(elapsed, 3),
                "output_dir": str(result.output_dir),
                "apks": [str(path) for path in result.apk_paths],
                "signed": result.signed,
            }
        )
        return

    if not quiet:
        for apk in result.apk_paths:
            typer.echo(f"✓ Saved: {apk}")
        typer.echo(f"Successfully converted AAB to APK(s) in: {result.output_dir}")
    if timing:
        typer.echo(f"\nConversion completed in {elapsed:.3f} seconds")


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    input_aab: Path = typer.Argument(..., help="Input .aab file path."),
    keystore: Path | None = typer.Option(None, "--keystore", help=KEYSTORE_HELP),
    ks_pass: str | None = typer.Option(None, "--ks-pass", help=KS_PASS_HELP),
    key_alias: str | None = typer.Option(None, "--key-alias", help=KEY_ALIAS_HELP),
    key_pass: str | None = typer.Option(None, "--key-pass", help=KEY_PASS_HELP),
    bundletool: Path | None = typer.Option(None, "--bundletool", help=BUNDLETOOL_HELP),
    java: Path | None = typer.Option(None, "--java", help=JAVA_HELP),
    json_output: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Validate inputs and tool availability without converting."""
    debug: bool = bool(ctx.obj.get("debug", False))
    _configure_logging(verbose=False, quiet=True)

    try:
        from aab2apk.api import check_aab_file

        report = check_aab_file(
            input_aab=input_aab,
            keystore=keystore,
            keystore_password=ks_pass,
            key_alias=key_alias,
            key_password=key_pass,
            bundletool_path=bundletool,
            java_path=java,
        )
    except Exception as exc:
        raise _fail(exc, debug, json_output)

    if json_output:
        validation: dict[str, Any] = {
            "input_aab": str(report.input_aab),
            "java": str(report.java),
            "bundletool": str(report.bundletool),
            "signing_enabled": report.signing_enabled,
        }
        if report.keystore is not None:
            validation["keystore"] = str(report.keystore)
        _echo_json({"status": "success", "validation": validation})
        return

    typer.echo("Validation successful:")
    typer.echo(f"  Input AAB: {report.input_aab}")
    typer.echo(f"  Java: {report.java}")
    typer.echo(f"  bundletool: {report.bundletool}")
    if report.keystore is not None:
        typer.echo(f"  Signing: Enabled (keystore: {report.keystore})")
    else:
        typer.echo("  Signing: Disabled")
    typer.echo("\nAll checks passed. Ready for conversion.")


@app.command("tools")
def tools_cmd(
    json_output: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Print detected Java, bundletool and apksigner locations."""
    from aab2apk.api import list_tools

    report = list_tools()
    if json_output:
        _echo_json({"status": "success", "tools": report.as_dict()})
        return

    typer.echo("Detected tools:\n")
    for name, path in report.as_dict().items():
        typer.echo(f"{name}: {path or 'Not found'}")


if __name__ == "__main__":
    app()
