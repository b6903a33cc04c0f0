"""APK signing through the Android SDK ``apksigner`` tool."""

from __future__ import annotations

import logging
from pathlib import Path

from aab2apk.application.ports import ProcessRunner, ToolLocator
from aab2apk.application.results import ProcessResult
from aab2apk.schemas import SigningConfig

logger = logging.getLogger(__name__)

_SUCCESS_MARKERS = ("signed", "verified")
_FAILURE_MARKERS = ("error", "failed", "exception")


def classify_signing_result(result: ProcessResult) -> bool:
    """Decide whether an apksigner run succeeded.

    A non-zero exit status is always a failure. Otherwise the case-folded
    stderr is scanned: success markers win over failure markers, and with
    neither present the exit status decides.

    Notes
    -----
    This text matching depends on apksigner's wording and can misclassify
    other signer versions.
    """
    if not result.success:
        return False
    diagnostics = result.stderr.lower()
    if any(marker in diagnostics for marker in _SUCCESS_MARKERS):
        return True
    if any(marker in diagnostics for marker in _FAILURE_MARKERS):
        return False
    return result.success


def build_sign_args(apk_path: Path, signing: SigningConfig) -> list[str]:
    """Return ``apksigner sign`` arguments for one APK."""
    return [
        "sign",
        "--ks",
        str(signing.keystore_path),
        "--ks-pass",
        f"pass:{signing.keystore_password.get_secret_value()}",
        "--key-pass",
        f"pass:{signing.key_password.get_secret_value()}",
        "--ks-key-alias",
        signing.key_alias,
        str(apk_path),
    ]


class ApksignerSigner:
    """Sign APKs in place with apksigner."""

    def __init__(self, runner: ProcessRunner, locator: ToolLocator) -> None:
        self.runner = runner
        self.locator = locator

    def sign_apk(self, apk_path: Path, signing: SigningConfig) -> bool:
        """Sign a single APK.

        Parameters
        ----------
        apk_path : Path
            APK to sign in place.
        signing : SigningConfig
            Keystore, alias and passwords.

        Returns
        -------
        bool
            ``True`` when apksigner reports success.
        """
        apksigner = self.locator.find_apksigner()
        if apksigner is None:
            logger.error(
                "apksigner not found. Please install Android SDK Build Tools "
                "or add it to PATH"
            )
            return False

        if not apk_path.exists():
            logger.error("APK file does not exist: %s", apk_path)
            return False

        result = self.runner.run(str(apksigner), build_sign_args(apk_path, signing))
        if not classify_signing_result(result):
            logger.error("APK signing failed: %s", apk_path)
            if result.stderr:
                logger.error("%s", result.stderr.rstrip())
            return False

        logger.info("Signed %s", apk_path.name)
        return True

    def sign_apks(self, target: Path, signing: SigningConfig) -> bool:
        """Sign every APK in a directory.

        All APKs are attempted even after a failure; the result is ``True``
        only if each one signed. ``.apks`` archives are not supported and
        always fail without running the signer.
        """
        if target.suffix == ".apks":
            logger.warning(
                "Signing .apks files requires extraction. Please sign individual APKs."
            )
            return False

        if target.is_dir():
            all_signed = True
            for entry in sorted(target.iterdir()):
                if entry.is_file() and entry.suffix == ".apk":
                    if not self.sign_apk(entry, signing):
                        all_signed = False
            return all_signed

        return self.sign_apk(target, signing)
