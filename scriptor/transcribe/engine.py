"""
scriptor.transcribe.engine - whisper.cpp transcription engine.

Runs the resolved whisper.cpp executable with fixed decoding flags and
plain-text output. whisper.cpp appends the ``.txt`` extension to the
output stem itself.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from scriptor.config import ScriptorConfig
from scriptor.exceptions import (
    BinaryNotFoundError,
    OutputNotProducedError,
    TranscriptionError,
)
from scriptor.io import remove_file
from scriptor.logging import logger
from scriptor.resolver import ResolvedBinary
from scriptor.validation import check_model

STDERR_TAIL_LINES = 20


class Transcriber(Protocol):
    def transcribe(self, audio_path: Path, output_stem: Path) -> Path: ...


def build_whisper_args(
    config: ScriptorConfig,
    audio_path: Path,
    output_stem: Path,
) -> list[str]:
    """Build the whisper.cpp argument list (without the executable)."""
    return [
        "-m",
        str(config.model),
        "-l",
        config.language,
        "-t",
        str(config.threads),
        # no max-context truncation
        "-mc",
        "0",
        "-sow",
        # no max segment length
        "-ml",
        "0",
        "-otxt",
        "-of",
        str(output_stem),
        str(audio_path),
    ]


def _tail(text: str, lines: int = STDERR_TAIL_LINES) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


class WhisperCppTranscriber:
    """Transcribes WAV files by shelling out to whisper.cpp."""

    def __init__(self, binary: ResolvedBinary, config: ScriptorConfig) -> None:
        self.binary = binary
        self.config = config

    def check(self) -> None:
        """Verify the model and binary exist before any work starts.

        Raises:
            ModelNotFoundError: If the model file is missing
            BinaryNotFoundError: If the resolved binary disappeared
        """
        check_model(self.config.model)
        if not self.binary.path.exists():
            raise BinaryNotFoundError(f"whisper binary not found at {self.binary.path}")

    def transcribe(self, audio_path: Path, output_stem: Path) -> Path:
        """Transcribe a WAV file to ``<output_stem>.txt``.

        Args:
            audio_path: 16kHz mono WAV
            output_stem: Output path without extension

        Returns:
            Path to the transcript

        Raises:
            ModelNotFoundError: If the model file is missing
            BinaryNotFoundError: If the binary is missing
            TranscriptionError: If the audio is missing or whisper.cpp fails
            OutputNotProducedError: If whisper.cpp exits cleanly without output
        """
        self.check()
        if not audio_path.is_file():
            raise TranscriptionError(f"Audio file not found: {audio_path}")

        transcript = output_stem.with_name(f"{output_stem.name}.txt")
        # A leftover transcript from an interrupted run must not count as output
        remove_file(transcript)
        transcript.parent.mkdir(parents=True, exist_ok=True)

        cmd = [str(self.binary.path), *build_whisper_args(self.config, audio_path, output_stem)]
        logger.debug("Running: %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise TranscriptionError(f"Could not run {self.binary.path}: {e}") from e

        if proc.returncode != 0:
            detail = _tail(proc.stderr) or f"exit code {proc.returncode}"
            raise TranscriptionError(f"whisper.cpp failed: {detail}")
        if not transcript.exists():
            raise OutputNotProducedError(str(transcript))

        return transcript
