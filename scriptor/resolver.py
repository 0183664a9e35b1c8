"""
scriptor.resolver - whisper.cpp binary detection.

Prefers a ``whisper-cli`` installed on PATH (e.g. via Homebrew) and falls
back to the ``main`` binary of a whisper.cpp source checkout. Resolution is
a read-only probe performed once per invocation.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from scriptor.config import ScriptorConfig
from scriptor.exceptions import BinaryNotFoundError


class WhisperSource(str, Enum):
    INSTALLED = "installed"
    SOURCE_BUILD = "source-build"


@dataclass(frozen=True)
class ResolvedBinary:
    source: WhisperSource
    path: Path

    def describe(self) -> str:
        if self.source is WhisperSource.INSTALLED:
            return f"Installed ({self.path})"
        return f"Source build ({self.path})"


def resolve_whisper_binary(
    config: ScriptorConfig,
    which: Callable[[str], str | None] = shutil.which,
) -> ResolvedBinary:
    """Pick the transcriber executable for this run.

    Args:
        config: Resolved configuration
        which: PATH lookup function (injectable for tests)

    Returns:
        The resolved binary and where it came from

    Raises:
        BinaryNotFoundError: If neither the installed command nor the
            source-build binary exists
    """
    installed = which(config.whisper_command)
    if installed:
        return ResolvedBinary(WhisperSource.INSTALLED, Path(installed))

    source_binary = config.source_binary
    if source_binary.is_file():
        return ResolvedBinary(WhisperSource.SOURCE_BUILD, source_binary)

    raise BinaryNotFoundError(
        f"{config.whisper_command} not found on PATH and no source build at {source_binary}"
    )


def describe_installation(
    config: ScriptorConfig,
    which: Callable[[str], str | None] = shutil.which,
) -> str:
    """One-line whisper installation status, for display."""
    try:
        return resolve_whisper_binary(config, which).describe()
    except BinaryNotFoundError:
        return "Source build or not found"
