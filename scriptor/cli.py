"""
scriptor.cli - Typer CLI entry point.

Provides one subcommand per pipeline step plus batch processing,
model download and cleanup.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scriptor import __version__
from scriptor.batch import run_batch
from scriptor.config import ScriptorConfig, load_config
from scriptor.exceptions import DependencyError, ScriptorError
from scriptor.extract.audio import AudioExtractor, FFmpegExtractor, format_size
from scriptor.io import clean_outputs
from scriptor.logging import configure_logging
from scriptor.models import DEFAULT_MODEL_SIZE, download_model, model_path, validate_model_size
from scriptor.naming import derive_job
from scriptor.resolver import describe_installation, resolve_whisper_binary
from scriptor.transcribe.engine import Transcriber, WhisperCppTranscriber
from scriptor.validation import (
    check_ffmpeg,
    check_model,
    validate_batch_dir,
    validate_input_file,
)

app = typer.Typer(
    name="scriptor",
    help="Video transcription with whisper.cpp.\n\n"
    "Extracts 16kHz mono audio with ffmpeg and transcribes it with whisper-cli "
    "(or a source-built whisper.cpp), one file or a whole directory at a time.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"scriptor {__version__}")
        raise typer.Exit()


def fail(error: ScriptorError) -> NoReturn:
    """Print an error with its remediation hint and exit non-zero."""
    message = error.message if isinstance(error, DependencyError) else str(error)
    console.print(f"[red]Error: {escape(message)}[/red]")
    hint = getattr(error, "install_hint", None)
    if hint:
        console.print(escape(hint))
    raise typer.Exit(1)


def get_config(ctx: typer.Context) -> ScriptorConfig:
    """Resolve the config once per invocation and cache it on the context."""
    state = ctx.ensure_object(dict)
    if "config" not in state:
        try:
            state["config"] = load_config(state.get("config_file"), state.get("overrides"))
        except ScriptorError as e:
            fail(e)
    return state["config"]


def build_extractor(config: ScriptorConfig) -> AudioExtractor:
    check_ffmpeg(config.ffmpeg)
    return FFmpegExtractor(config.ffmpeg)


def build_transcriber(config: ScriptorConfig) -> Transcriber:
    binary = resolve_whisper_binary(config)
    check_model(config.model)
    return WhisperCppTranscriber(binary, config)


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="YAML config file (default: ./scriptor.yaml if present)"
    ),
    model: Path | None = typer.Option(
        None, "--model", "-m", help="Whisper model file (default: models/ggml-large-v3.bin)"
    ),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language code (default: ru)"
    ),
    threads: int | None = typer.Option(
        None, "--threads", "-t", help="Number of whisper.cpp threads (default: 4)"
    ),
    whisper_cpp_path: Path | None = typer.Option(
        None, "--whisper-cpp-path", help="whisper.cpp source checkout (default: ../whisper.cpp)"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Directory for WAV/TXT output (default: files)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Scriptor - batch video transcription with whisper.cpp."""
    configure_logging(verbose)
    ctx.obj = {
        "config_file": config_file,
        "overrides": {
            "model": model,
            "language": language,
            "threads": threads,
            "whisper_cpp_path": whisper_cpp_path,
            "output_dir": output_dir,
        },
    }


# Stage 1: Audio Extraction


@app.command("extract")
def extract_cmd(
    ctx: typer.Context,
    input_path: Path | None = typer.Argument(
        None, help="Video file (default: configured input, files/input.mp4)"
    ),
) -> None:
    """Extract audio from a video to <output-dir>/<name>.wav."""
    config = get_config(ctx)
    source = input_path or config.input_path
    job = derive_job(source, config.output_dir)

    try:
        validate_input_file(source)
        extractor = build_extractor(config)
        console.print(
            f"Extracting audio from {escape(str(source))} to {escape(str(job.wav_path))}..."
        )
        extractor.extract(source, job.wav_path)
    except ScriptorError as e:
        fail(e)

    console.print(
        f"[green]✓[/green] Audio extracted successfully to {escape(str(job.wav_path))} "
        f"[dim]({format_size(job.wav_path)})[/dim]"
    )


# Stage 2: Transcription


@app.command("transcribe")
def transcribe_cmd(
    ctx: typer.Context,
    input_path: Path | None = typer.Argument(
        None, help="Input whose <output-dir>/<name>.wav to transcribe"
    ),
) -> None:
    """Transcribe <output-dir>/<name>.wav to <output-dir>/<name>.txt."""
    config = get_config(ctx)
    job = derive_job(input_path or config.input_path, config.output_dir)

    try:
        transcriber = build_transcriber(config)
        console.print(f"Transcribing {escape(str(job.wav_path))} to text...")
        transcript = transcriber.transcribe(job.wav_path, job.output_stem)
    except ScriptorError as e:
        fail(e)

    console.print(f"[green]✓[/green] Transcription completed: {escape(str(transcript))}")


@app.command("process")
def process_cmd(
    ctx: typer.Context,
    input_path: Path | None = typer.Argument(
        None, help="Video file (default: configured input, files/input.mp4)"
    ),
) -> None:
    """Extract audio and transcribe a single video."""
    config = get_config(ctx)
    source = input_path or config.input_path
    job = derive_job(source, config.output_dir)

    try:
        validate_input_file(source)
        transcriber = build_transcriber(config)
        extractor = build_extractor(config)

        console.print(f"Extracting audio from {escape(str(source))}...")
        extractor.extract(source, job.wav_path)
        console.print(f"Transcribing {escape(str(job.wav_path))} to text...")
        transcript = transcriber.transcribe(job.wav_path, job.output_stem)
    except ScriptorError as e:
        fail(e)

    console.print(f"[green]✓[/green] Transcription completed: {escape(str(transcript))}")


app.command("all", help="Extract audio and transcribe (same as process).")(process_cmd)


@app.command("process-dir")
def process_dir_cmd(
    ctx: typer.Context,
    directory: str | None = typer.Argument(None, help="Directory containing videos"),
    extension: str | None = typer.Option(
        None, "--ext", "-e", help="Input file extension (default: .mp4)"
    ),
) -> None:
    """Process every video in a directory, skipping ones already transcribed."""
    if extension:
        ctx.obj["overrides"]["input_extension"] = extension
    config = get_config(ctx)

    try:
        batch_dir = validate_batch_dir(directory)
        transcriber = build_transcriber(config)
        extractor = build_extractor(config)
    except ScriptorError as e:
        fail(e)

    console.print(
        f"[cyan]Processing {config.input_extension} files in: {escape(str(batch_dir))}[/cyan]"
    )
    console.print("[dim]Checking for existing transcriptions and skipping duplicates...[/dim]")

    try:
        result = run_batch(
            directory=batch_dir,
            extractor=extractor,
            transcriber=transcriber,
            scratch_dir=config.output_dir,
            extension=config.input_extension,
            console=console,
        )
    except ScriptorError as e:
        fail(e)

    table = Table(title="Batch processing complete")
    table.add_column("", style="cyan")
    table.add_column("Files", justify="right")
    table.add_row("Total files found", str(result.total_found))
    table.add_row("Already transcribed (skipped)", str(result.skipped))
    table.add_row("Newly transcribed", f"[green]{result.processed}[/green]")
    table.add_row("Failed", f"[red]{result.failed}[/red]" if result.failed else "0")
    console.print()
    console.print(table)

    if result.failed > 0:
        raise typer.Exit(1)


# Models


@app.command("download-model")
def download_model_cmd(
    ctx: typer.Context,
    size: str = typer.Option(
        DEFAULT_MODEL_SIZE,
        "--size",
        "-s",
        envvar="MODEL_SIZE",
        help="Model to download: tiny, base, small, medium, large-v3",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Re-download an existing model"),
) -> None:
    """Download a whisper.cpp model from Hugging Face."""
    config = get_config(ctx)

    try:
        size = validate_model_size(size)
    except ScriptorError as e:
        fail(e)

    existing = model_path(config.models_dir, size)
    if existing.exists() and not force:
        console.print(
            f"[green]✓[/green] Model already present: {escape(str(existing))} "
            "[dim](use --force to download again)[/dim]"
        )
        return

    console.print(f"Downloading ggml-{escape(size)}.bin model from Hugging Face...")
    try:
        path = download_model(size, config.models_dir, force=force, console=console)
    except ScriptorError as e:
        fail(e)

    console.print(f"[green]✓[/green] Model downloaded to {escape(str(path))}")


# Housekeeping


@app.command("clean")
def clean_cmd(ctx: typer.Context) -> None:
    """Remove generated WAV and TXT files from the output directory."""
    config = get_config(ctx)

    console.print("Cleaning generated files...")
    removed = clean_outputs(config.output_dir)
    for path in removed:
        console.print(f"[dim]  removed {escape(str(path))}[/dim]")
    console.print(f"[green]✓[/green] Clean complete ({len(removed)} file(s) removed)")


@app.command("info")
def info_cmd(ctx: typer.Context) -> None:
    """Show configuration and tool availability."""
    config = get_config(ctx)

    try:
        ffmpeg_status = f"[green]{check_ffmpeg(config.ffmpeg)}[/green]"
    except DependencyError as e:
        ffmpeg_status = f"[red]{escape(e.message)}[/red]"

    model_status = "[green]found[/green]" if config.model.is_file() else "[red]missing[/red]"

    table = Table(title="Scriptor configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Model", f"{escape(str(config.model))} ({model_status})")
    table.add_row("Language", config.language)
    table.add_row("Threads", str(config.threads))
    table.add_row("Output directory", escape(str(config.output_dir)))
    table.add_row("Models directory", escape(str(config.models_dir)))
    table.add_row("Default input", escape(str(config.input_path)))
    table.add_row("Whisper installation", escape(describe_installation(config)))
    table.add_row("FFmpeg", ffmpeg_status)
    console.print(table)


if __name__ == "__main__":
    app()
