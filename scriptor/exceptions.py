"""
scriptor.exceptions - Custom exception classes.

All Scriptor-specific exceptions inherit from ScriptorError.
"""


class ScriptorError(Exception):
    """Base exception for all Scriptor errors."""

    pass


class ConfigError(ScriptorError):
    """Configuration loading or validation error."""

    pass


class ValidationError(ScriptorError):
    """Invalid or missing input parameter."""

    pass


class ExtractionError(ScriptorError):
    """Audio extraction error."""

    pass


class TranscriptionError(ScriptorError):
    """Transcription error."""

    pass


class OutputNotProducedError(TranscriptionError):
    """Transcriber exited cleanly but the transcript file is missing."""

    def __init__(self, expected: str):
        self.expected = expected
        super().__init__(f"Transcription file not created: {expected}")


class DownloadError(ScriptorError):
    """Model download error."""

    pass


class DependencyError(ScriptorError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")


class BinaryNotFoundError(DependencyError):
    """No whisper.cpp executable could be found."""

    def __init__(self, message: str = "whisper-cli not found"):
        super().__init__(
            "whisper-cli",
            message,
            "Install with: brew install whisper-cpp\n"
            "Or build from source and set WHISPER_CPP_PATH",
        )


class ModelNotFoundError(DependencyError):
    """Configured GGML model file does not exist."""

    def __init__(self, path: str, size: str = "large-v3"):
        self.path = path
        super().__init__(
            "model",
            f"Model not found at {path}",
            f"Download with: scriptor download-model --size {size}",
        )
