"""Application use-cases orchestrating bundle conversion workflows."""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path

from pydantic import ValidationError

from aab2apk.adapters.bundletool import BundletoolAdapter
from aab2apk.adapters.signing import ApksignerSigner
from aab2apk.application.options import EXTRACTION_DIR, INTERMEDIATE_ARCHIVE, ToolPaths
from aab2apk.application.ports import (
    ApkSigner,
    ArchiveExtractor,
    Environment,
    ProcessRunner,
    ToolLocator,
)
from aab2apk.application.results import ConversionResult, ToolReport, ValidationReport
from aab2apk.errors import (
    ConversionError,
    OutputError,
    PreconditionError,
    SigningError,
    ToolExecutionError,
    ToolNotFoundError,
)
from aab2apk.infrastructure import filesystem as fs
from aab2apk.infrastructure.discovery import create_tool_locator
from aab2apk.infrastructure.environment import ProcessEnvironment
from aab2apk.infrastructure.extraction import create_extractor
from aab2apk.infrastructure.process import SubprocessRunner
from aab2apk.schemas import ConversionConfig, SigningConfig

logger = logging.getLogger(__name__)

ENV_REFERENCE_PREFIX = "env:"


def resolve_secret(value: str | None, environment: Environment) -> str | None:
    """Resolve ``env:NAME`` references against the environment.

    Raises
    ------
    PreconditionError
        If the referenced variable is not set.
    """
    if value is None or not value.startswith(ENV_REFERENCE_PREFIX):
        return value
    name = value[len(ENV_REFERENCE_PREFIX):]
    resolved = environment.get(name)
    if resolved is None:
        raise PreconditionError(f"Environment variable '{name}' not set")
    return resolved


def build_conversion_config(
    *,
    input_aab: Path,
    output_dir: Path | None = None,
    mode: str = "universal",
    keystore: Path | None = None,
    keystore_password: str | None = None,
    key_alias: str | None = None,
    key_password: str | None = None,
    bundletool_path: Path | None = None,
    java_path: Path | None = None,
    environment: Environment | None = None,
) -> ConversionConfig:
    """Build a validated configuration from command/API params.

    Any signing parameter enables signing; the keystore and key alias are
    then required.
    """
    environment = environment or ProcessEnvironment()
    payload: dict[str, object] = {
        "input_aab": input_aab,
        "mode": mode,
        "bundletool_path": bundletool_path,
        "java_path": java_path,
    }
    if output_dir is not None:
        payload["output_dir"] = output_dir

    signing_requested = any(
        item is not None
        for item in (keystore, keystore_password, key_alias, key_password)
    )
    try:
        if signing_requested:
            if keystore is None:
                raise PreconditionError("Keystore path is required when signing.")
            if not key_alias:
                raise PreconditionError("Key alias is required when signing.")
            payload["signing"] = SigningConfig(
                keystore_path=keystore,
                keystore_password=resolve_secret(keystore_password, environment) or "",
                key_alias=key_alias,
                key_password=resolve_secret(key_password, environment),
            )
        return ConversionConfig.model_validate(payload)
    except ValidationError as exc:
        raise PreconditionError(f"Invalid conversion parameters: {exc}") from exc


def validate_configuration(config: ConversionConfig) -> None:
    """Check input bundle and keystore before any tool runs.

    Raises
    ------
    PreconditionError
        If the bundle is missing or not an App Bundle, or the keystore is
        missing or empty.
    """
    if not fs.file_exists(config.input_aab):
        raise PreconditionError(f"Input AAB file does not exist: {config.input_aab}")
    if not fs.validate_aab_file(config.input_aab):
        raise PreconditionError(f"Invalid AAB file: {config.input_aab}")

    if config.signing is not None:
        keystore = config.signing.keystore_path
        if not fs.file_exists(keystore):
            raise PreconditionError(f"Keystore file does not exist: {keystore}")
        if not fs.validate_keystore_file(keystore):
            raise PreconditionError(f"Invalid keystore file: {keystore}")


def resolve_tool_paths(
    config: ConversionConfig, locator: ToolLocator | None = None
) -> ToolPaths:
    """Fill in bundletool and Java locations not given explicitly.

    Raises
    ------
    ToolNotFoundError
        If a tool is neither configured nor discoverable.
    """
    locator = locator or create_tool_locator(ProcessEnvironment())

    bundletool = config.bundletool_path or locator.find_bundletool()
    if bundletool is None:
        raise ToolNotFoundError(
            "bundletool.jar not found. Please specify --bundletool or place "
            "bundletool.jar in current directory or PATH"
        )

    java = config.java_path or locator.find_java_executable()
    if java is None:
        raise ToolNotFoundError(
            "Java executable not found. Please install Java or specify --java"
        )
    return ToolPaths(java=java, bundletool=bundletool)


def check_configuration(
    config: ConversionConfig, locator: ToolLocator | None = None
) -> ValidationReport:
    """Use-case: validate a configuration without converting."""
    tools = resolve_tool_paths(config, locator)
    validate_configuration(config)
    return ValidationReport(
        input_aab=config.input_aab,
        java=tools.java,
        bundletool=tools.bundletool,
        keystore=config.signing.keystore_path if config.signing else None,
    )


def detect_tools(locator: ToolLocator | None = None) -> ToolReport:
    """Use-case: report which external tools are available."""
    locator = locator or create_tool_locator(ProcessEnvironment())
    return ToolReport(
        java=locator.find_java_executable(),
        bundletool=locator.find_bundletool(),
        apksigner=locator.find_apksigner(),
    )


def _run_bundletool(
    config: ConversionConfig,
    tools: ToolPaths,
    runner: ProcessRunner,
    temp_dir: Path,
) -> Path:
    if not fs.file_exists(tools.bundletool):
        raise ToolNotFoundError(f"bundletool.jar not found: {tools.bundletool}")

    archive = temp_dir / INTERMEDIATE_ARCHIVE
    if config.mode == "universal":
        logger.info("Converting AAB to universal APK...")
    else:
        logger.info("Converting AAB to split APKs...")

    bundletool = BundletoolAdapter(runner, tools.java, tools.bundletool)
    result = bundletool.build_apks(config.input_aab, archive, config.mode, temp_dir)
    if not result.success:
        raise ToolExecutionError("bundletool execution failed", result)
    if not fs.file_exists(archive):
        raise ConversionError("bundletool did not generate output file")
    return archive


def _extract_archive(
    archive: Path, temp_dir: Path, extractor: ArchiveExtractor
) -> Path:
    extract_dir = temp_dir / EXTRACTION_DIR
    if not fs.create_directories(extract_dir):
        raise ConversionError(f"Failed to create extraction directory: {extract_dir}")
    result = extractor.extract(archive, extract_dir, temp_dir)
    if not result.success:
        raise ToolExecutionError("Failed to extract APKs from .apks file", result)
    return extract_dir


def _collect_universal(config: ConversionConfig, extract_dir: Path) -> tuple[Path, ...]:
    extracted = next(fs.iter_apks(extract_dir), None)
    if extracted is None:
        raise ConversionError("No APK found in extracted files")
    destination = config.universal_apk_path()
    fs.move_file(extracted, destination)
    return (destination,)


def _collect_split(config: ConversionConfig, extract_dir: Path) -> tuple[Path, ...]:
    copied: list[Path] = []
    for extracted in fs.iter_apks(extract_dir):
        destination = config.output_dir / extracted.name
        try:
            shutil.copyfile(extracted, destination)
        except OSError as exc:
            raise OutputError(f"Failed to copy APK {extracted.name}: {exc}") from exc
        copied.append(destination)
    if not copied:
        raise ConversionError("No APK files found in extracted .apks file")
    return tuple(copied)


def _sign_outputs(
    config: ConversionConfig, signing: SigningConfig, signer: ApkSigner
) -> None:
    if config.mode == "universal":
        signed = signer.sign_apk(config.universal_apk_path(), signing)
    else:
        signed = signer.sign_apks(config.output_dir, signing)
    if not signed:
        raise SigningError("APK signing failed")


def convert_bundle(
    config: ConversionConfig,
    *,
    tools: ToolPaths | None = None,
    runner: ProcessRunner | None = None,
    locator: ToolLocator | None = None,
    extractor: ArchiveExtractor | None = None,
    signer: ApkSigner | None = None,
    environment: Environment | None = None,
) -> ConversionResult:
    """Use-case: convert an App Bundle into universal or split APKs.

    Parameters
    ----------
    config : ConversionConfig
        Validated conversion configuration.
    tools : ToolPaths | None, default=None
        Pre-resolved tool locations; discovered from ``config`` when omitted.
    runner, locator, extractor, signer, environment
        Collaborators; platform defaults are used when omitted.

    Returns
    -------
    ConversionResult
        Output directory and the APKs placed in it.

    Raises
    ------
    ConversionError
        If any step fails. The scratch directory is removed either way.
    """
    environment = environment or ProcessEnvironment()
    runner = runner or SubprocessRunner()
    locator = locator or create_tool_locator(environment)
    extractor = extractor or create_extractor(environment, runner)
    signer = signer or ApksignerSigner(runner, locator)
    tools = tools or resolve_tool_paths(config, locator)

    started = time.perf_counter()
    if not fs.create_directories(config.output_dir):
        raise OutputError(f"Failed to create output directory: {config.output_dir}")

    with fs.scoped_temp_directory(environment) as temp_dir:
        archive = _run_bundletool(config, tools, runner, temp_dir)
        extract_dir = _extract_archive(archive, temp_dir, extractor)
        if config.mode == "universal":
            apk_paths = _collect_universal(config, extract_dir)
        else:
            apk_paths = _collect_split(config, extract_dir)

        if config.signing is not None:
            _sign_outputs(config, config.signing, signer)

    logger.debug("converted %s into %s", config.input_aab, config.output_dir)
    return ConversionResult(
        output_dir=config.output_dir,
        mode=config.mode,
        apk_paths=apk_paths,
        signed=config.signing is not None,
        elapsed_seconds=time.perf_counter() - started,
    )

