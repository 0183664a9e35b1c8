"""
scriptor.naming - Output filename derivation.

Every artifact a job produces is named after the input's base name: the
file name with its directory and final extension removed. Dots and spaces
inside the name are preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def base_name(path: str | Path) -> str:
    """Return the file name of ``path`` without directories or final extension.

    Only the last extension is stripped: ``"a/b c.d.mp4"`` -> ``"b c.d"``.
    """
    return Path(path).stem


@dataclass(frozen=True)
class Job:
    """Paths belonging to a single input file."""

    input_path: Path
    base_name: str
    wav_path: Path
    txt_path: Path

    @property
    def output_stem(self) -> Path:
        # whisper.cpp appends ".txt" to the -of argument itself
        return self.txt_path.parent / self.base_name


def derive_job(input_path: str | Path, output_dir: str | Path) -> Job:
    """Build the Job for ``input_path`` with outputs placed in ``output_dir``."""
    input_path = Path(input_path)
    output_dir = Path(output_dir)
    name = base_name(input_path)
    return Job(
        input_path=input_path,
        base_name=name,
        wav_path=output_dir / f"{name}.wav",
        txt_path=output_dir / f"{name}.txt",
    )


def transcript_for(input_path: str | Path, directory: str | Path) -> Path:
    """Path of the finished transcript for ``input_path`` inside ``directory``."""
    return Path(directory) / f"{base_name(input_path)}.txt"
