"""
scriptor.batch - Directory batch processing.

Transcribes every video in a directory that does not yet have a transcript
beside it. Audio is extracted to a scratch directory, transcribed there,
and only the finished transcript is moved next to the video, so an
interrupted job never leaves a partial transcript that later runs would
skip. Jobs run strictly one after another.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from rich.markup import escape

from scriptor.exceptions import ExtractionError, TranscriptionError
from scriptor.extract.audio import AudioExtractor
from scriptor.io import relocate, remove_file
from scriptor.logging import logger
from scriptor.naming import Job, derive_job, transcript_for
from scriptor.transcribe.engine import Transcriber
from scriptor.utils import format_duration


class JobState(str, Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    EXTRACTING = "extracting"
    TRANSCRIBING = "transcribing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class JobOutcome:
    job: Job
    state: JobState = JobState.PENDING
    error: str | None = None
    elapsed: float = 0.0
    transcript: Path | None = None


@dataclass
class BatchResult:
    directory: Path
    outcomes: list[JobOutcome] = field(default_factory=list)

    @property
    def total_found(self) -> int:
        return len(self.outcomes)

    @property
    def skipped(self) -> int:
        return self._count(JobState.SKIPPED)

    @property
    def processed(self) -> int:
        return self._count(JobState.DONE)

    @property
    def failed(self) -> int:
        return self._count(JobState.FAILED)

    def _count(self, state: JobState) -> int:
        return sum(1 for outcome in self.outcomes if outcome.state is state)


def find_inputs(directory: Path, extension: str = ".mp4") -> list[Path]:
    """List immediate child files of ``directory`` with the given extension."""
    extension = extension.lower()
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == extension
    )


def scratch_job(source: Path, scratch_dir: Path) -> Job:
    """Derive the scratch paths for ``source``.

    A WAV input sitting in the scratch directory would share its name with
    the extracted audio, so the scratch audio gets a separate name there.
    """
    job = derive_job(source, scratch_dir)
    if job.wav_path.resolve() == source.resolve():
        job = replace(job, wav_path=job.wav_path.with_name(f"{job.base_name}.scratch.wav"))
    return job


def run_job(
    source: Path,
    directory: Path,
    extractor: AudioExtractor,
    transcriber: Transcriber,
    scratch_dir: Path,
    console=None,
) -> JobOutcome:
    """Extract, transcribe and relocate a single file.

    Extraction and transcription failures are recorded on the outcome.
    The scratch WAV is always removed; the source never is.
    """
    job = scratch_job(source, scratch_dir)
    outcome = JobOutcome(job=job)
    final = transcript_for(source, directory)
    started = time.monotonic()

    try:
        outcome.state = JobState.EXTRACTING
        if console:
            console.print("  → Extracting audio...")
        extractor.extract(source, job.wav_path)

        outcome.state = JobState.TRANSCRIBING
        if console:
            console.print("  → Transcribing...")
        produced = transcriber.transcribe(job.wav_path, job.output_stem)

        outcome.transcript = relocate(produced, final)
        outcome.state = JobState.DONE
    except (ExtractionError, TranscriptionError, OSError) as e:
        logger.warning("%s failed while %s: %s", job.base_name, outcome.state.value, e)
        outcome.error = str(e)
        outcome.state = JobState.FAILED
    finally:
        remove_file(job.wav_path)
        outcome.elapsed = time.monotonic() - started

    return outcome


def run_batch(
    directory: Path,
    extractor: AudioExtractor,
    transcriber: Transcriber,
    scratch_dir: Path,
    extension: str = ".mp4",
    console=None,
) -> BatchResult:
    """Transcribe every not-yet-transcribed video in ``directory``.

    Args:
        directory: Directory holding the videos; transcripts land beside them
        extractor: Audio extraction capability
        transcriber: Transcription capability
        scratch_dir: Where intermediate WAV/TXT files are written
        extension: Input file extension to match
        console: Optional rich console for output

    Returns:
        BatchResult with one outcome per candidate file
    """
    result = BatchResult(directory=directory)

    for source in find_inputs(directory, extension):
        job = derive_job(source, scratch_dir)
        name = job.base_name
        final = transcript_for(source, directory)

        if final.exists():
            if console:
                console.print(f"[dim]\\[SKIP] {escape(name)} (already transcribed)[/dim]")
            result.outcomes.append(JobOutcome(job=job, state=JobState.SKIPPED))
            continue

        if console:
            done = result.processed + result.failed
            console.print(f"\n[cyan]\\[{done + 1}] Processing: {escape(name)}[/cyan]")

        outcome = run_job(source, directory, extractor, transcriber, scratch_dir, console)
        result.outcomes.append(outcome)

        if console:
            if outcome.state is JobState.DONE:
                console.print(
                    f"  [green]✓[/green] Transcription saved: {escape(str(final))} "
                    f"[dim]({format_duration(outcome.elapsed)})[/dim]"
                )
            else:
                console.print(f"  [red]✗ Error: {escape(outcome.error or 'unknown error')}[/red]")

    return result
