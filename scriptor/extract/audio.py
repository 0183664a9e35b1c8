"""
scriptor.extract.audio - FFmpeg audio extraction.

Produces the WAV format whisper.cpp expects: 16kHz, mono, signed 16-bit
little-endian PCM. Existing output files are overwritten.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from scriptor.exceptions import ExtractionError
from scriptor.logging import logger

SAMPLE_RATE = 16000
CHANNELS = 1
CODEC = "pcm_s16le"


class AudioExtractor(Protocol):
    def extract(self, source: Path, output: Path) -> Path: ...


def build_ffmpeg_args(source: Path, output: Path, ffmpeg: str = "ffmpeg") -> list[str]:
    return [
        ffmpeg,
        "-y",
        "-i",
        str(source),
        "-vn",
        "-acodec",
        CODEC,
        "-ar",
        str(SAMPLE_RATE),
        "-ac",
        str(CHANNELS),
        str(output),
    ]


class FFmpegExtractor:
    """Extracts whisper-ready audio by shelling out to ffmpeg."""

    def __init__(self, ffmpeg: str = "ffmpeg") -> None:
        self.ffmpeg = ffmpeg

    def extract(self, source: Path, output: Path) -> Path:
        """Extract audio from a video file.

        Args:
            source: Path to source video file
            output: Output path for the 16kHz mono WAV

        Returns:
            The output path

        Raises:
            ExtractionError: If the source is missing or FFmpeg fails
        """
        if not source.is_file():
            raise ExtractionError(f"Source file not found: {source}")

        output.parent.mkdir(parents=True, exist_ok=True)
        cmd = build_ffmpeg_args(source, output, self.ffmpeg)
        logger.debug("Running: %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ExtractionError(f"Could not run {self.ffmpeg}: {e}") from e

        if proc.returncode != 0:
            raise ExtractionError(f"FFmpeg extraction failed: {proc.stderr.strip()}")
        if not output.exists():
            raise ExtractionError(f"FFmpeg did not produce {output}")

        return output


def format_size(path: Path) -> str:
    """Format file size in human-readable format."""
    if not path.exists():
        return "-"
    size = path.stat().st_size
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
