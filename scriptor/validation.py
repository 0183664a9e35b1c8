"""
scriptor.validation - Dependency checks and validation utilities.

Validates environment, dependencies, and input paths before processing.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from scriptor.exceptions import DependencyError, ModelNotFoundError, ValidationError


def check_ffmpeg(ffmpeg: str = "ffmpeg") -> str:
    """Check that FFmpeg is installed and return its version.

    Args:
        ffmpeg: Command name or path of the ffmpeg executable

    Returns:
        Version string, or "unknown" if it cannot be parsed

    Raises:
        DependencyError: If FFmpeg is not found
    """
    ffmpeg_path = shutil.which(ffmpeg)
    if not ffmpeg_path:
        raise DependencyError(
            "ffmpeg",
            f"FFmpeg not found: {ffmpeg}",
            "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)",
        )

    try:
        proc = subprocess.run(
            [ffmpeg_path, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        return version_line.split()[2] if version_line else "unknown"
    except (subprocess.TimeoutExpired, IndexError):
        return "unknown"


def check_model(path: Path) -> Path:
    """Ensure the GGML model file exists.

    Raises:
        ModelNotFoundError: If the file is missing
    """
    if not path.is_file():
        raise ModelNotFoundError(str(path), size=model_size_from_path(path))
    return path


def model_size_from_path(path: Path) -> str:
    """Guess the model size name from a ggml-<size>.bin filename."""
    stem = path.stem
    if stem.startswith("ggml-") and len(stem) > len("ggml-"):
        return stem[len("ggml-") :]
    return "large-v3"


def validate_input_file(path: Path) -> Path:
    """Validate that an input file exists and is a regular file.

    Raises:
        ValidationError: If the path is missing or not a file
    """
    if not path.exists():
        raise ValidationError(f"Input file not found: {path}")
    if not path.is_file():
        raise ValidationError(f"Not a file: {path}")
    return path


def validate_batch_dir(directory: str | Path | None) -> Path:
    """Validate the directory given for batch processing.

    Raises:
        ValidationError: If the directory is unset, missing, or not a directory
    """
    if directory is None or not str(directory).strip():
        raise ValidationError(
            'DIR parameter is required\nUsage: scriptor process-dir "/path/to/videos"'
        )
    directory = Path(directory)
    if not directory.exists():
        raise ValidationError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ValidationError(f"Not a directory: {directory}")
    return directory
