"""
scriptor.models - GGML model download.

Fetches whisper.cpp models from Hugging Face into the local models
directory. Downloads are streamed to a ``.part`` file and renamed when
complete, so an interrupted download never looks like a usable model.
"""

from __future__ import annotations

import http.client
import re
import urllib.error
import urllib.request
from pathlib import Path

from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from scriptor.exceptions import DownloadError, ValidationError
from scriptor.io import remove_file
from scriptor.logging import logger

MODEL_URL_TEMPLATE = "https://huggingface.co/ggerganov/whisper.cpp/resolve/main/ggml-{size}.bin"
DEFAULT_MODEL_SIZE = "large-v3"
CHUNK_SIZE = 1024 * 1024

KNOWN_MODEL_SIZES = (
    "tiny",
    "tiny.en",
    "base",
    "base.en",
    "small",
    "small.en",
    "medium",
    "medium.en",
    "large-v1",
    "large-v2",
    "large-v3",
    "large-v3-turbo",
)

_SIZE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_model_size(size: str) -> str:
    """Check a model size name is safe to put in a URL and filename.

    Raises:
        ValidationError: If the name contains anything but letters, digits,
            dots, dashes and underscores
    """
    size = size.strip()
    if not _SIZE_PATTERN.match(size):
        raise ValidationError(
            f"Invalid model size: {size!r}. Expected one of: {', '.join(KNOWN_MODEL_SIZES)}"
        )
    if size not in KNOWN_MODEL_SIZES:
        logger.warning("Model size %r is not a known whisper.cpp model, trying anyway", size)
    return size


def model_url(size: str) -> str:
    return MODEL_URL_TEMPLATE.format(size=size)


def model_path(models_dir: Path, size: str) -> Path:
    return models_dir / f"ggml-{size}.bin"


def download_model(
    size: str = DEFAULT_MODEL_SIZE,
    models_dir: Path = Path("models"),
    force: bool = False,
    console=None,
) -> Path:
    """Download a whisper.cpp GGML model.

    Args:
        size: Model size name (tiny, base, small, medium, large-v3, ...)
        models_dir: Destination directory
        force: Re-download even if the model already exists
        console: Optional rich console for progress output

    Returns:
        Path to the downloaded model

    Raises:
        ValidationError: If the size name is invalid
        DownloadError: If the download fails
    """
    size = validate_model_size(size)
    dest = model_path(models_dir, size)

    if dest.exists() and not force:
        logger.debug("Model already present: %s", dest)
        return dest

    models_dir.mkdir(parents=True, exist_ok=True)
    url = model_url(size)
    partial = dest.with_name(f"{dest.name}.part")
    logger.debug("Downloading %s -> %s", url, dest)

    try:
        with urllib.request.urlopen(url) as response:
            total = response.headers.get("Content-Length")
            progress = Progress(
                TextColumn("[cyan]{task.description}"),
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                TimeRemainingColumn(),
                console=console,
                disable=console is None,
            )
            with open(partial, "wb") as out, progress:
                task = progress.add_task(dest.name, total=int(total) if total else None)
                while True:
                    chunk = response.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    progress.advance(task, len(chunk))
    except (urllib.error.URLError, http.client.HTTPException) as e:
        remove_file(partial)
        raise DownloadError(f"Failed to download {url}: {e}") from e
    except OSError as e:
        remove_file(partial)
        raise DownloadError(f"Failed to write {dest}: {e}") from e

    partial.replace(dest)
    return dest
