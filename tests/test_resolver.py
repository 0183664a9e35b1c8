"""Tests for scriptor.resolver module."""

from __future__ import annotations

from pathlib import Path

import pytest

from scriptor.config import ScriptorConfig
from scriptor.exceptions import BinaryNotFoundError
from scriptor.resolver import (
    ResolvedBinary,
    WhisperSource,
    describe_installation,
    resolve_whisper_binary,
)


def not_on_path(command: str) -> None:
    return None


def make_source_build(config: ScriptorConfig) -> Path:
    binary = config.source_binary
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_text("#!/bin/sh\n")
    return binary


class TestResolveWhisperBinary:
    def test_prefers_installed_command(self, config: ScriptorConfig) -> None:
        make_source_build(config)
        resolved = resolve_whisper_binary(config, which=lambda cmd: f"/opt/homebrew/bin/{cmd}")
        assert resolved.source is WhisperSource.INSTALLED
        assert resolved.path == Path("/opt/homebrew/bin/whisper-cli")

    def test_falls_back_to_source_build(self, config: ScriptorConfig) -> None:
        binary = make_source_build(config)
        resolved = resolve_whisper_binary(config, which=not_on_path)
        assert resolved == ResolvedBinary(WhisperSource.SOURCE_BUILD, binary)

    def test_source_build_path_is_main(self, config: ScriptorConfig) -> None:
        assert config.source_binary == config.whisper_cpp_path / "main"

    def test_missing_everywhere_raises(self, config: ScriptorConfig) -> None:
        with pytest.raises(BinaryNotFoundError) as exc_info:
            resolve_whisper_binary(config, which=not_on_path)
        assert "brew install whisper-cpp" in exc_info.value.install_hint
        assert "WHISPER_CPP_PATH" in exc_info.value.install_hint

    def test_source_directory_is_not_a_binary(self, config: ScriptorConfig) -> None:
        config.source_binary.mkdir(parents=True)
        with pytest.raises(BinaryNotFoundError):
            resolve_whisper_binary(config, which=not_on_path)


class TestDescribeInstallation:
    def test_installed(self, config: ScriptorConfig) -> None:
        status = describe_installation(config, which=lambda cmd: "/usr/local/bin/whisper-cli")
        assert status == "Installed (/usr/local/bin/whisper-cli)"

    def test_source_build(self, config: ScriptorConfig) -> None:
        make_source_build(config)
        assert describe_installation(config, which=not_on_path).startswith("Source build (")

    def test_not_found(self, config: ScriptorConfig) -> None:
        assert describe_installation(config, which=not_on_path) == "Source build or not found"
