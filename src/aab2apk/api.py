"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from aab2apk.application.results import ConversionResult, ToolReport, ValidationReport
from aab2apk.application.use_cases import build_conversion_config
from aab2apk.application.use_cases import check_configuration
from aab2apk.application.use_cases import convert_bundle
from aab2apk.application.use_cases import detect_tools
from aab2apk.application.use_cases import resolve_tool_paths
from aab2apk.application.use_cases import validate_configuration
from aab2apk.infrastructure.discovery import create_tool_locator
from aab2apk.infrastructure.environment import ProcessEnvironment


def convert_aab_file(
    input_aab: Path,
    output_dir: Optional[Path] = None,
    mode: str = "universal",
    keystore: Optional[Path] = None,
    keystore_password: Optional[str] = None,
    key_alias: Optional[str] = None,
    key_password: Optional[str] = None,
    bundletool_path: Optional[Path] = None,
    java_path: Optional[Path] = None,
) -> ConversionResult:
    """Convert an ``.aab`` file into APKs inside ``output_dir``."""
    environment = ProcessEnvironment()
    config = build_conversion_config(
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
    locator = create_tool_locator(environment)
    tools = resolve_tool_paths(config, locator)
    validate_configuration(config)
    return convert_bundle(
        config,
        tools=tools,
        locator=locator,
        environment=environment,
    )


def check_aab_file(
    input_aab: Path,
    keystore: Optional[Path] = None,
    keystore_password: Optional[str] = None,
    key_alias: Optional[str] = None,
    key_password: Optional[str] = None,
    bundletool_path: Optional[Path] = None,
    java_path: Optional[Path] = None,
) -> ValidationReport:
    """Validate inputs and tool availability without converting."""
    environment = ProcessEnvironment()
    config = build_conversion_config(
        input_aab=input_aab,
        keystore=keystore,
        keystore_password=keystore_password,
        key_alias=key_alias,
        key_password=key_password,
        bundletool_path=bundletool_path,
        java_path=java_path,
        environment=environment,
    )
    return check_configuration(config, create_tool_locator(environment))


def list_tools() -> ToolReport:
    """Report Java, bundletool and apksigner locations on this host."""
    return detect_tools(create_tool_locator(ProcessEnvironment()))
