"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from scriptor.config import ScriptorConfig
from scriptor.exceptions import ExtractionError, TranscriptionError


class FakeExtractor:
    """AudioExtractor that writes a placeholder WAV instead of running ffmpeg."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[Path, Path]] = []

    def extract(self, source: Path, output: Path) -> Path:
        self.calls.append((source, output))
        if source.stem in self.fail_on:
            raise ExtractionError(f"FFmpeg extraction failed: {source.name}: Invalid data")
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(b"RIFF....WAVEfmt ")
        return output


class FakeTranscriber:
    """Transcriber that writes ``<stem>.txt`` instead of running whisper.cpp."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[Path, Path]] = []

    def transcribe(self, audio_path: Path, output_stem: Path) -> Path:
        self.calls.append((audio_path, output_stem))
        assert audio_path.exists(), "extraction must finish before transcription"
        if output_stem.name in self.fail_on:
            raise TranscriptionError("whisper.cpp failed: error: failed to read WAV file")
        transcript = output_stem.with_name(f"{output_stem.name}.txt")
        transcript.write_text(f"transcript of {output_stem.name}\n", encoding="utf-8")
        return transcript


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    """Create a placeholder GGML model file."""
    path = tmp_path / "models" / "ggml-large-v3.bin"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"ggml")
    return path


@pytest.fixture
def config(tmp_path: Path, model_file: Path) -> ScriptorConfig:
    """Return a config rooted in a temporary directory."""
    return ScriptorConfig(
        model=model_file,
        output_dir=tmp_path / "files",
        models_dir=tmp_path / "models",
        whisper_cpp_path=tmp_path / "whisper.cpp",
    )


@pytest.fixture
def video_dir(tmp_path: Path) -> Path:
    """Directory with three videos, one of which is already transcribed."""
    directory = tmp_path / "videos"
    directory.mkdir()
    for name in ("intro.mp4", "part 2.final.mp4", "zoom call.mp4"):
        (directory / name).write_bytes(b"fake video content")
    (directory / "intro.txt").write_text("existing transcript\n", encoding="utf-8")
    return directory


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def make_extractor():
    return FakeExtractor


@pytest.fixture
def make_transcriber():
    return FakeTranscriber
