"""Unit tests for configuration building, validation and tool resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from aab2apk.application.use_cases import (
    build_conversion_config,
    check_configuration,
    detect_tools,
    resolve_secret,
    resolve_tool_paths,
    validate_configuration,
)
from aab2apk.errors import PreconditionError, ToolNotFoundError
from aab2apk.infrastructure.environment import MappingEnvironment
from aab2apk.schemas import DEFAULT_OUTPUT_DIR, ConversionConfig, SigningConfig


class _Locator:
    def __init__(
        self,
        java: Path | None = None,
        bundletool: Path | None = None,
        apksigner: Path | None = None,
    ) -> None:
        self.java = java
        self.bundletool = bundletool
        self.apksigner = apksigner

    def find_bundletool(self) -> Path | None:
        return self.bundletool

    def find_java_executable(self) -> Path | None:
        return self.java

    def find_apksigner(self) -> Path | None:
        return self.apksigner


def test_resolve_secret_passthrough() -> None:
    env = MappingEnvironment({})
    assert resolve_secret("plain", env) == "plain"
    assert resolve_secret(None, env) is None


def test_resolve_secret_from_environment() -> None:
    env = MappingEnvironment({"KS_PASS": "s3cret"})
    assert resolve_secret("env:KS_PASS", env) == "s3cret"


def test_resolve_secret_missing_variable() -> None:
    with pytest.raises(PreconditionError, match="Environment variable 'NOPE' not set"):
        resolve_secret("env:NOPE", MappingEnvironment({}))


def test_defaults() -> None:
    config = build_conversion_config(input_aab=Path("app.aab"), environment=MappingEnvironment())
    assert config.output_dir == DEFAULT_OUTPUT_DIR
    assert config.mode == "universal"
    assert config.signing is None


@pytest.mark.parametrize("mode", ["SPLIT", "Split", " split "])
def test_mode_is_case_insensitive(mode: str) -> None:
    config = build_conversion_config(
        input_aab=Path("app.aab"), mode=mode, environment=MappingEnvironment()
    )
    assert config.mode == "split"


def test_invalid_mode() -> None:
    with pytest.raises(PreconditionError, match="Invalid mode"):
        build_conversion_config(
            input_aab=Path("app.aab"), mode="fat", environment=MappingEnvironment()
        )


def test_signing_requires_alias(keystore: Path) -> None:
    with pytest.raises(PreconditionError, match="Key alias is required"):
        build_conversion_config(
            input_aab=Path("app.aab"),
            keystore=keystore,
            keystore_password="pw",
            environment=MappingEnvironment(),
        )


def test_signing_requires_keystore() -> None:
    with pytest.raises(PreconditionError, match="Keystore path is required"):
        build_conversion_config(
            input_aab=Path("app.aab"), key_alias="release", environment=MappingEnvironment()
        )


def test_signing_passwords_resolved(keystore: Path) -> None:
    """Environment references resolve and the key password defaults to the store password."""
    config = build_conversion_config(
        input_aab=Path("app.aab"),
        keystore=keystore,
        keystore_password="env:STORE",
        key_alias="release",
        environment=MappingEnvironment({"STORE": "from-env"}),
    )
    assert config.signing is not None
    assert config.signing.keystore_password.get_secret_value() == "from-env"
    assert config.signing.key_password.get_secret_value() == "from-env"


def test_signing_passwords_are_not_rendered(keystore: Path) -> None:
    signing = SigningConfig(
        keystore_path=keystore,
        keystore_password="hunter2",
        key_alias="k",
        key_password="other",
    )
    assert "hunter2" not in repr(signing)
    assert signing.key_password.get_secret_value() == "other"


def test_validate_configuration_accepts_valid(aab_file: Path, keystore: Path) -> None:
    config = ConversionConfig(
        input_aab=aab_file,
        signing=SigningConfig(keystore_path=keystore, key_alias="k"),
    )
    validate_configuration(config)


def test_validate_configuration_missing_bundle(tmp_path: Path) -> None:
    config = ConversionConfig(input_aab=tmp_path / "missing.aab")
    with pytest.raises(PreconditionError, match="Input AAB file does not exist"):
        validate_configuration(config)


def test_validate_configuration_invalid_bundle(tmp_path: Path) -> None:
    bundle = tmp_path / "app.aab"
    bundle.write_bytes(b"not a zip")
    with pytest.raises(PreconditionError, match="Invalid AAB file") as info:
        validate_configuration(ConversionConfig(input_aab=bundle))
    assert info.value.exit_code == 2


def test_validate_configuration_keystore_checks(tmp_path: Path, aab_file: Path) -> None:
    missing = ConversionConfig(
        input_aab=aab_file,
        signing=SigningConfig(keystore_path=tmp_path / "missing.jks", key_alias="k"),
    )
    with pytest.raises(PreconditionError, match="Keystore file does not exist"):
        validate_configuration(missing)

    empty_path = tmp_path / "empty.jks"
    empty_path.write_bytes(b"")
    empty = ConversionConfig(
        input_aab=aab_file, signing=SigningConfig(keystore_path=empty_path, key_alias="k")
    )
    with pytest.raises(PreconditionError, match="Invalid keystore file"):
        validate_configuration(empty)


def test_resolve_tool_paths_prefers_explicit(tmp_path: Path) -> None:
    config = ConversionConfig(
        input_aab=Path("app.aab"),
        bundletool_path=tmp_path / "bt.jar",
        java_path=tmp_path / "java",
    )
    tools = resolve_tool_paths(config, _Locator(java=Path("/x"), bundletool=Path("/y")))
    assert tools.bundletool == tmp_path / "bt.jar"
    assert tools.java == tmp_path / "java"


def test_resolve_tool_paths_discovers() -> None:
    config = ConversionConfig(input_aab=Path("app.aab"))
    tools = resolve_tool_paths(config, _Locator(java=Path("/jdk/java"), bundletool=Path("/bt.jar")))
    assert tools.java == Path("/jdk/java")
    assert tools.bundletool == Path("/bt.jar")


def test_resolve_tool_paths_missing_bundletool() -> None:
    config = ConversionConfig(input_aab=Path("app.aab"))
    with pytest.raises(ToolNotFoundError, match="bundletool.jar not found") as info:
        resolve_tool_paths(config, _Locator(java=Path("/jdk/java")))
    assert info.value.exit_code == 3


def test_resolve_tool_paths_missing_java() -> None:
    config = ConversionConfig(input_aab=Path("app.aab"))
    with pytest.raises(ToolNotFoundError, match="Java executable not found"):
        resolve_tool_paths(config, _Locator(bundletool=Path("/bt.jar")))


def test_check_configuration_report(aab_file: Path, keystore: Path) -> None:
    config = ConversionConfig(
        input_aab=aab_file, signing=SigningConfig(keystore_path=keystore, key_alias="k")
    )
    report = check_configuration(
        config, _Locator(java=Path("/jdk/java"), bundletool=Path("/bt.jar"))
    )
    assert report.input_aab == aab_file
    assert report.keystore == keystore
    assert report.signing_enabled is True


def test_detect_tools() -> None:
    report = detect_tools(_Locator(java=Path("/jdk/java")))
    assert report.as_dict() == {
        "java": str(Path("/jdk/java")),
        "bundletool": None,
        "apksigner": None,
    }


def test_config_rejects_cli_only_fields() -> None:
    """Verbosity is handled by the CLI and is not part of the configuration."""
    with pytest.raises(ValidationError):
        ConversionConfig.model_validate({"input_aab": "app.aab", "verbose": True})
