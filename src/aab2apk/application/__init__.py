"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from aab2apk.application.options import ToolPaths
from aab2apk.application.ports import (
    ApkSigner,
    ArchiveExtractor,
    Environment,
    ProcessRunner,
    ToolLocator,
)
from aab2apk.application.results import (
    ConversionResult,
    ProcessResult,
    ToolReport,
    ValidationReport,
)
from aab2apk.schemas import ConversionConfig


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
    """Build validated configuration via lazy use-case import."""
    from aab2apk.application.use_cases import build_conversion_config as _impl

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
        environment=environment,
    )


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
    """Convert an App Bundle via lazy use-case import."""
    from aab2apk.application.use_cases import convert_bundle as _impl

    return _impl(
        config,
        tools=tools,
        runner=runner,
        locator=locator,
        extractor=extractor,
        signer=signer,
        environment=environment,
    )


def check_configuration(
    config: ConversionConfig, locator: ToolLocator | None = None
) -> ValidationReport:
    """Validate configuration via lazy use-case import."""
    from aab2apk.application.use_cases import check_configuration as _impl

    return _impl(config, locator)


def detect_tools(locator: ToolLocator | None = None) -> ToolReport:
    """Detect external tools via lazy use-case import."""
    from aab2apk.application.use_cases import detect_tools as _impl

    return _impl(locator)


__all__ = [
    "ConversionResult",
    "ProcessResult",
    "ToolPaths",
    "ToolReport",
    "ValidationReport",
    "build_conversion_config",
    "check_configuration",
    "convert_bundle",
    "detect_tools",
]
