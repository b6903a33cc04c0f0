"""Top-level API for Android App Bundle to APK conversion."""

from __future__ import annotations

from pathlib import Path

from aab2apk.application.results import ConversionResult

__version__ = "1.0.0"


def convert_aab_to_apk(
    input_aab: Path,
    output_dir: Path | None = None,
    *,
    mode: str = "universal",
    keystore: Path | None = None,
    keystore_password: str | None = None,
    key_alias: str | None = None,
    key_password: str | None = None,
    bundletool_path: Path | None = None,
    java_path: Path | None = None,
) -> ConversionResult:
    """Convert an App Bundle into a universal APK or a set of split APKs.

    Parameters
    ----------
    input_aab : Path
        Source ``.aab`` file.
    output_dir : Path | None, default=None
        Directory receiving the APKs; ``./dist`` when omitted.
    mode : {"universal", "split"}, default="universal"
        Single universal APK or base plus configuration splits.
    keystore : Path | None, default=None
        Keystore used to sign the output. Signing is skipped when no
        signing parameter is given.
    keystore_password, key_password : str | None
        Passwords, or ``env:NAME`` to read them from the environment.
    key_alias : str | None
        Key alias inside the keystore.
    bundletool_path, java_path : Path | None
        Explicit tool locations; discovered on the host when omitted.

    Returns
    -------
    ConversionResult
        Output directory and produced APK paths.
    """
    from .api import convert_aab_file as _impl

    return _impl(
        input_aab=input_aab,
        output_dir=output_dir,
        mode=mode,
        keystore=keystore,
        keystore_password=keystore_password,
        key_alias=key_alias,
        key_password=key_password,
        bundletool_path=bundletool_path,
        java_path=java_path,
    )


__all__ = ["ConversionResult", "convert_aab_to_apk"]
