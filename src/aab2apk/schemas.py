"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)

from aab2apk.types import OUTPUT_MODES, OutputMode

DEFAULT_OUTPUT_DIR = Path("./dist")


class SigningConfig(BaseModel):
    """Keystore parameters used to sign produced APKs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    keystore_path: Path
    keystore_password: SecretStr = SecretStr("")
    key_alias: str
    key_password: SecretStr = SecretStr("")

    @model_validator(mode="before")
    @classmethod
    def _default_key_password(cls, data: Any) -> Any:
        # apksigner falls back to the keystore password for the key
        if isinstance(data, dict) and data.get("key_password") is None:
            data = {**data, "key_password": data.get("keystore_password") or ""}
        return data

    @field_validator("key_alias")
    @classmethod
    def _validate_alias(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Key alias is required when signing.")
        return value


class ConversionConfig(BaseModel):
    """Validated input for one bundle conversion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_aab: Path
    output_dir: Path = Field(default=DEFAULT_OUTPUT_DIR)
    mode: OutputMode = "universal"
    signing: SigningConfig | None = None
    bundletool_path: Path | None = None
    java_path: Path | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: object) -> object:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered not in OUTPUT_MODES:
                raise ValueError("Invalid mode. Must be 'universal' or 'split'.")
            return lowered
        return value

    @property
    def bundle_stem(self) -> str:
        """Return the input bundle file name without extension."""
        return self.input_aab.stem

    def universal_apk_path(self) -> Path:
        """Return the output path of the APK produced in universal mode."""
        return self.output_dir / f"{self.bundle_stem}.apk"
