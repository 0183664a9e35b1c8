"""
scriptor.config - YAML/environment config loading, merging, validation.

Handles loading scriptor.yaml, applying environment overrides and
command-line overrides on top of the defaults, and validating all
parameters. The resolved config is frozen for the lifetime of a run.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scriptor.exceptions import ConfigError

CONFIG_FILENAME = "scriptor.yaml"

ENV_VARS: dict[str, str] = {
    "model": "SCRIPTOR_MODEL",
    "language": "SCRIPTOR_LANGUAGE",
    "threads": "SCRIPTOR_THREADS",
    "whisper_cpp_path": "WHISPER_CPP_PATH",
    "input_path": "SCRIPTOR_INPUT",
    "output_dir": "SCRIPTOR_OUTPUT_DIR",
    "models_dir": "SCRIPTOR_MODELS_DIR",
    "ffmpeg": "SCRIPTOR_FFMPEG",
}


class ScriptorConfig(BaseModel):
    """Resolved configuration for a Scriptor run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    model: Path = Path("models/ggml-large-v3.bin")
    language: str = "ru"
    threads: int = Field(default=4, gt=0)

    whisper_command: str = "whisper-cli"
    whisper_cpp_path: Path = Path("../whisper.cpp")
    ffmpeg: str = "ffmpeg"

    output_dir: Path = Path("files")
    models_dir: Path = Path("models")
    input_path: Path = Path("files/input.mp4")
    input_extension: str = ".mp4"

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        code = v.strip().lower()
        if not code or not code.replace("-", "").isalpha():
            raise ValueError(f"language must be a language code like 'ru' or 'auto', got {v!r}")
        return code

    @field_validator("input_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        ext = v.strip().lower()
        if not ext.lstrip("."):
            raise ValueError("input_extension must not be empty")
        return ext if ext.startswith(".") else f".{ext}"

    @property
    def source_binary(self) -> Path:
        """Path of the binary produced by a whisper.cpp source build."""
        return self.whisper_cpp_path / "main"


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a dict."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Collect config values set through environment variables."""
    environ = os.environ if environ is None else environ
    return {
        key: environ[var] for key, var in ENV_VARS.items() if environ.get(var)
    }


def merge_config(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge overrides onto base. Overrides set to None are ignored."""
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def load_config(
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
    environ: dict[str, str] | None = None,
) -> ScriptorConfig:
    """Load and validate configuration.

    Precedence, lowest first: defaults, YAML file, environment, overrides.

    Args:
        config_file: Explicit YAML file; falls back to ./scriptor.yaml if present
        overrides: Values from the command line (None entries are ignored)
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: If the file is missing or any value is invalid
    """
    raw: dict[str, Any] = {}
    if config_file is not None:
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")
        raw = load_yaml_config(config_file)
    elif Path(CONFIG_FILENAME).exists():
        raw = load_yaml_config(Path(CONFIG_FILENAME))

    merged = merge_config(raw, env_overrides(environ))
    merged = merge_config(merged, overrides or {})

    try:
        return ScriptorConfig(**merged)
    except ValidationError as e:
        raise ConfigError(str(e)) from e

